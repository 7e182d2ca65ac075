from springfem.results.combo_result import AnalysisReport, ComboResult, SpringResult

__all__ = ["AnalysisReport", "ComboResult", "SpringResult"]
