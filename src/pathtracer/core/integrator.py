"""Path radiance estimator.

``color(ray, bounces_remaining)`` estimates the light arriving along a ray:

1. With no bounce budget left the path contributes black.
2. The nearest hit is searched in (T_MIN, T_MAX). T_MIN = 0.001 keeps a
   scattered ray from re-hitting its own origin through float round-off.
3. On a hit the material scatters the ray. The result is the attenuation
   times the color of the scattered ray with one less bounce; an absorbed ray
   contributes black.
4. On a miss the ray sees the sky: a vertical gradient between the bottom and
   top colors keyed to the ray's unit direction y component.

Taichi functions cannot recurse. Each step only multiplies the result of the
next, so the recursion is run as a loop carrying the product of attenuations.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.core.integrator import trace_color
    >>> r, g, b = trace_color((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), bounces=50)
    >>> # Empty world, straight up: the top sky color (0.5, 0.7, 1.0)
"""

import taichi as ti

from pathtracer.core.constants import DEFAULT_MAX_DEPTH, SKY_BOTTOM, SKY_TOP, T_MAX, T_MIN
from pathtracer.core.ray import Ray, make_ray
from pathtracer.core.vector import lerp, unit_vector, vec3
from pathtracer.materials.registry import scatter
from pathtracer.scene.intersection import hit_world

# =============================================================================
# Background Configuration
# =============================================================================

_background_bottom = ti.Vector.field(3, dtype=ti.f32, shape=())
_background_top = ti.Vector.field(3, dtype=ti.f32, shape=())

# Python-side copy; uploaded to the fields before every kernel launch
_background = {"bottom": SKY_BOTTOM, "top": SKY_TOP}


def set_background(bottom: tuple[float, float, float], top: tuple[float, float, float]) -> None:
    """Set the sky gradient seen by rays that escape the world.

    Args:
        bottom: Color for rays pointing straight down (unit y = -1).
        top: Color for rays pointing straight up (unit y = +1).

    Raises:
        ValueError: If a color does not have three components.
    """
    for name, value in (("bottom", bottom), ("top", top)):
        if len(value) != 3:
            raise ValueError(f"Background {name} color must have 3 components, got {len(value)}")
    _background["bottom"] = (float(bottom[0]), float(bottom[1]), float(bottom[2]))
    _background["top"] = (float(top[0]), float(top[1]), float(top[2]))


def reset_background() -> None:
    """Restore the default white-to-sky-blue gradient."""
    set_background(SKY_BOTTOM, SKY_TOP)


def get_background() -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Get the current sky gradient as (bottom, top)."""
    return _background["bottom"], _background["top"]


def upload_background() -> None:
    """Copy the sky gradient into the fields read by the kernels."""
    _background_bottom[None] = _background["bottom"]
    _background_top[None] = _background["top"]


# =============================================================================
# Path Tracing Core
# =============================================================================


@ti.func
def background_color(ray: Ray) -> vec3:
    """Sky color for a ray that hits nothing.

    Args:
        ray: The escaping ray. Its direction must be non-zero.

    Returns:
        lerp(bottom, top, 0.5 * (unit_direction.y + 1)).
    """
    unit_direction = unit_vector(ray.direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return lerp(_background_bottom[None], _background_top[None], t)


@ti.func
def color(ray: Ray, bounces_remaining: ti.i32) -> vec3:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace.
        bounces_remaining: Number of scatter events still allowed. Zero
            returns black immediately.

    Returns:
        The estimated radiance (RGB).
    """
    result = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)
    origin = ray.origin
    direction = ray.direction
    remaining = bounces_remaining

    while remaining > 0:
        current = make_ray(origin, direction)
        rec = hit_world(current, T_MIN, T_MAX)

        if rec.hit == 1:
            attenuation, scattered, did_scatter = scatter(
                rec.material_id, current, rec.position, rec.normal
            )
            if did_scatter == 1:
                throughput *= attenuation
                origin = scattered.origin
                direction = scattered.direction
                remaining -= 1
            else:
                # Absorbed
                remaining = 0
        else:
            result = throughput * background_color(current)
            remaining = 0

    return result


# =============================================================================
# Python-callable Probes
# =============================================================================


@ti.kernel
def _trace_single(origin: vec3, direction: vec3, bounces: ti.i32) -> vec3:
    return color(make_ray(origin, direction), bounces)


@ti.kernel
def _background_single(direction: vec3) -> vec3:
    return background_color(make_ray(vec3(0.0, 0.0, 0.0), direction))


def trace_color(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    bounces: int = DEFAULT_MAX_DEPTH,
) -> tuple[float, float, float]:
    """Trace a single ray from Python.

    Intended for testing and debugging; frames are rendered in parallel by
    pathtracer.core.renderer.

    Args:
        origin: Ray origin.
        direction: Ray direction (non-zero).
        bounces: Bounce budget.

    Returns:
        Tuple of (R, G, B) radiance.
    """
    upload_background()
    c = _trace_single(vec3(*origin), vec3(*direction), bounces)
    return (float(c[0]), float(c[1]), float(c[2]))


def sky_color(direction: tuple[float, float, float]) -> tuple[float, float, float]:
    """Evaluate the sky gradient for a direction from Python."""
    upload_background()
    c = _background_single(vec3(*direction))
    return (float(c[0]), float(c[1]), float(c[2]))
