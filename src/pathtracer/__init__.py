"""Taichi-based CPU path tracer for spheres with diffuse and metal materials.

Every pixel of a frame is sampled in parallel, traced through a sphere world
with recursive scattering, gamma corrected and packed into a 32-bit
0xAARRGGBB framebuffer that can be presented in a preview window.

Subpackages:
    core: Vectors, rays, the path integrator, the framebuffer and the renderer
    geometry: Sphere primitive and ray-sphere intersection
    materials: Diffuse and metal scattering behind one material table
    scene: Sphere world, nearest-hit query, World builder and preset scenes
    camera: Pinhole camera with ray generation
    preview: GGUI window and Matplotlib view

Modules:
    config: RenderConfig, JSON scene files and Taichi initialization
"""

__version__ = "0.1.0"
