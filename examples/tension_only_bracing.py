"""
Tension-Only Bracing Example

A single braced panel in the X-Y plane (Y up) with crossed tension-only
diagonals. Wind from either side switches off the diagonal that would go into
compression, and the remaining diagonal carries the full shear.
"""

from __future__ import annotations

from springfem import AnalysisSettings, Structure, run_analysis


def build_panel(width: float = 4.0, height: float = 3.0, k_frame: float = 1.0e6, k_brace: float = 2.0e5) -> Structure:
    s = Structure()
    s.add_node("A", 0.0, 0.0, 0.0)
    s.add_node("B", width, 0.0, 0.0)
    s.add_node("C", 0.0, height, 0.0)
    s.add_node("D", width, height, 0.0)

    s.add_spring("post_left", "A", "C", k_frame)
    s.add_spring("post_right", "B", "D", k_frame)
    s.add_spring("beam", "C", "D", k_frame)
    s.add_spring("brace_AD", "A", "D", k_brace, tension_only=True)
    s.add_spring("brace_BC", "B", "C", k_brace, tension_only=True)

    for name in ("A", "B"):
        s.def_support(name, True, True, True, True, True, True)
    for name in ("C", "D"):
        s.def_support(name, support_DZ=True)

    s.add_node_load("C", "FX", 10_000.0, case="W")
    s.add_load_combo("W+", factors={"W": 1.0}, tags=["strength"])
    s.add_load_combo("W-", factors={"W": -1.0}, tags=["strength"])
    return s


def main() -> None:
    structure = build_panel()
    report = run_analysis(structure, AnalysisSettings(verbose=True))

    for combo_name, result in report.results.items():
        print(f"\n=== {combo_name} ({result.iterations} iteration(s)) ===")
        for name, spring in result.spring_results.items():
            print(f"  {name:<11} {spring.state.value:<9} N = {spring.axial_force / 1000.0:9.3f} kN")
        for node_name in ("A", "B"):
            rx, ry = result.reaction_at(node_name)[0:2]
            print(f"  reaction {node_name}: RX = {rx / 1000.0:8.3f} kN, RY = {ry / 1000.0:8.3f} kN")

    for combo_name, error in report.failures.items():
        print(f"{combo_name}: {error}")


if __name__ == "__main__":
    main()
