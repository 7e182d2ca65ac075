from springfem.analysis.elements.spring3d import (
    axial_force,
    global_displacement_vector,
    global_end_force_vector,
    global_stiffness_12x12,
    local_displacement_vector,
    local_end_force_vector,
    local_stiffness_12x12,
)

__all__ = [
    "local_stiffness_12x12",
    "global_stiffness_12x12",
    "global_displacement_vector",
    "local_displacement_vector",
    "local_end_force_vector",
    "global_end_force_vector",
    "axial_force",
]
