from springfem.loads.loadcombo import LoadCombination

__all__ = ["LoadCombination"]
