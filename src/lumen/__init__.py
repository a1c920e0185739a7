"""Monte Carlo path tracing core.

This package provides a small offline renderer built around an exact
ray/primitive intersection kernel and a recursive path tracing integrator:
- Analytic intersection for spheres, planes, discs and axis-aligned cubes
- Materials expressed as an ordered set of scattering effects (a BSDF)
- Scene graph of transformed objects with nearest-hit and occlusion queries
- Importance-sampled path tracing with probability-weighted samples
- Progressive accumulation into a Taichi film with tone mapped output

Subpackages:
    core: Rays, transforms, color quantities, Monte Carlo primitives,
        integrators, film and progressive rendering
    geometry: Shape primitives and intersection algorithms
    materials: Directional distributions, effects and material models
    scene: Objects, scene aggregation and demo scenes
    camera: Camera models producing primary rays
    preview: Tone mapping, display and export utilities
"""

__version__ = "0.1.0"
