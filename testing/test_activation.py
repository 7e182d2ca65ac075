from __future__ import annotations

import logging

import pytest

from springfem import ActivationController, ActiveState, NonConvergenceError, Node, SpringElement, SupportSpring
from springfem.analysis.activation import spring_should_reactivate, spring_should_stay_active


def _tension_spring(**kwargs) -> SpringElement:
    options = {"tension_only": True}
    options.update(kwargs)
    return SpringElement("S1", Node("N1", (0.0, 0.0, 0.0)), Node("N2", (1.0, 0.0, 0.0)), 100.0, **options)


def _oscillating_solve(spring: SpringElement):
    """Stub solve: the spring is pushed while active and pulled while inactive."""

    def solve(combo_name: str) -> None:
        dx = -0.01 if spring.is_active(combo_name) else 0.01
        spring.i_node.set_displacement(combo_name, [0.0] * 6)
        spring.j_node.set_displacement(combo_name, [dx, 0.0, 0.0, 0.0, 0.0, 0.0])

    return solve


def test_transition_rules() -> None:
    tension = _tension_spring()
    compression = _tension_spring(tension_only=False, comp_only=True)
    plain = _tension_spring(tension_only=False)

    assert spring_should_stay_active(tension, 5.0)
    assert not spring_should_stay_active(tension, -5.0)
    assert spring_should_stay_active(compression, -5.0)
    assert not spring_should_stay_active(compression, 5.0)
    assert spring_should_stay_active(plain, 5.0)
    assert spring_should_stay_active(plain, -5.0)
    # zero force never switches a spring off
    assert spring_should_stay_active(tension, 0.0)
    assert spring_should_stay_active(compression, 0.0)

    assert spring_should_reactivate(tension, 1.0)
    assert not spring_should_reactivate(tension, -1.0)
    assert spring_should_reactivate(compression, -1.0)
    assert not spring_should_reactivate(compression, 1.0)


def test_begin_activates_unsolved_springs_only() -> None:
    spring = _tension_spring()
    other = SpringElement("S2", spring.j_node, Node("N3", (2.0, 0.0, 0.0)), 100.0)
    other.set_active("C1", False)

    controller = ActivationController([spring, other])
    controller.begin("C1")

    assert spring.state("C1") is ActiveState.ACTIVE
    assert other.state("C1") is ActiveState.INACTIVE


def test_update_deactivates_tension_only_spring_in_compression() -> None:
    spring = _tension_spring()
    controller = ActivationController([spring])
    controller.begin("C1")
    spring.i_node.set_displacement("C1", [0.0] * 6)
    spring.j_node.set_displacement("C1", [-0.01, 0.0, 0.0, 0.0, 0.0, 0.0])

    changes = controller.update("C1")

    assert len(changes) == 1
    change = changes[0]
    assert change.target == "S1"
    assert change.active is False
    assert change.value == pytest.approx(-1.0)
    assert spring.state("C1") is ActiveState.INACTIVE
    # a second pass finds nothing to change
    assert controller.update("C1") == []


def test_update_leaves_unrestricted_springs_alone() -> None:
    spring = _tension_spring(tension_only=False)
    controller = ActivationController([spring])
    controller.begin("C1")
    spring.i_node.set_displacement("C1", [0.0] * 6)
    spring.j_node.set_displacement("C1", [-0.01, 0.0, 0.0, 0.0, 0.0, 0.0])
    assert controller.update("C1") == []
    assert spring.is_active("C1")


def test_combinations_are_isolated() -> None:
    spring = _tension_spring()
    controller = ActivationController([spring])
    controller.begin("push")
    controller.begin("pull")
    spring.i_node.set_displacement("push", [0.0] * 6)
    spring.j_node.set_displacement("push", [-0.01, 0.0, 0.0, 0.0, 0.0, 0.0])

    controller.update("push")

    assert spring.state("push") is ActiveState.INACTIVE
    assert spring.state("pull") is ActiveState.ACTIVE
    assert spring.state("dead") is ActiveState.UNSOLVED


def test_run_converges_without_reactivation() -> None:
    spring = _tension_spring()
    controller = ActivationController([spring], max_iter=5)
    iterations = controller.run("C1", _oscillating_solve(spring))
    assert iterations == 2
    assert spring.state("C1") is ActiveState.INACTIVE


def test_run_raises_when_flags_keep_changing() -> None:
    spring = _tension_spring()
    controller = ActivationController([spring], max_iter=5, reactivate=True)

    with pytest.raises(NonConvergenceError) as excinfo:
        controller.run("C1", _oscillating_solve(spring))

    error = excinfo.value
    assert error.combo_name == "C1"
    assert error.iterations == 5
    assert set(error.active_states) == {"S1"}
    assert "did not converge" in str(error)


def test_run_logs_transitions(caplog: pytest.LogCaptureFixture) -> None:
    spring = _tension_spring()
    controller = ActivationController([spring], max_iter=5)
    with caplog.at_level(logging.DEBUG, logger="springfem"):
        controller.run("C1", _oscillating_solve(spring))
    assert any("S1 deactivated" in record.getMessage() for record in caplog.records)


def test_directional_support_spring_follows_displacement() -> None:
    node = Node("N1", (0.0, 0.0, 0.0))
    support = SupportSpring(100.0, direction="-")
    node.set_spring("DX", support)
    controller = ActivationController([], [node])
    controller.begin("C1")
    assert support.active["C1"] is True

    node.set_displacement("C1", [0.05, 0.0, 0.0, 0.0, 0.0, 0.0])
    changes = controller.update("C1")
    assert [change.target for change in changes] == ["N1:DX"]
    assert support.is_active("C1") is False

    node.set_displacement("C1", [-0.05, 0.0, 0.0, 0.0, 0.0, 0.0])
    controller.update("C1")
    assert support.is_active("C1") is True

    # zero displacement keeps the current flag
    node.set_displacement("C1", [0.0] * 6)
    assert controller.update("C1") == []


def test_two_way_support_spring_is_never_switched() -> None:
    node = Node("N1", (0.0, 0.0, 0.0))
    support = SupportSpring(100.0)
    node.set_spring("DY", support)
    controller = ActivationController([], [node])
    controller.begin("C1")
    node.set_displacement("C1", [0.0, -0.2, 0.0, 0.0, 0.0, 0.0])
    assert controller.update("C1") == []
    assert support.is_active("C1")


def test_max_iter_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ActivationController([], max_iter=0)
