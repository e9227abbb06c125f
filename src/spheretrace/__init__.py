"""Stochastic path tracer for scenes made of spheres.

Each pixel averages several jittered rays cast through a pinhole camera.
Rays bounce diffusely off the spheres until they escape to a sky gradient;
the averaged radiance is gamma corrected and quantized to 8-bit RGB.

Subpackages:
    core: Vector algebra, rays, sampling, the integrator and the render loop
    geometry: The Hittable contract and the sphere primitive
    scene: Scene traversal and the reference scene
    camera: Pinhole camera ray generation
    output: Pixel sinks (PPM writer, in-memory array) and PNG export
    accel: Optional Taichi data-parallel backend
"""

__version__ = "0.1.0"
