"""Vector utilities for the path tracer.

All geometry and color values are ``ti.math.vec3`` (three float32 components).
Taichi vectors are value types: arithmetic, negation, component-wise
multiply/divide and scalar multiply/divide all return new vectors, so this
module only adds the named helpers the tracer relies on.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from pathtracer.core.vector import vec3, unit_vector, lerp
    >>> @ti.kernel
    ... def sky() -> vec3:
    ...     return lerp(vec3(1.0, 1.0, 1.0), vec3(0.5, 0.7, 1.0), 0.5)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the right-handed cross product a x b.

    Returns:
        (a.y*b.z - a.z*b.y, a.z*b.x - a.x*b.z, a.x*b.y - a.y*b.x)
    """
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def squared_length(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes, as it avoids the
    square root.
    """
    return v.x * v.x + v.y * v.y + v.z * v.z


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(squared_length(v))


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Scale a vector to unit length.

    The caller must not pass a zero-length vector: the division is not
    guarded and produces NaN/Inf components.
    """
    return v / length(v)


@ti.func
def lerp(start: vec3, end: vec3, t: ti.f32) -> vec3:
    """Linearly interpolate between two vectors.

    Args:
        start: Value returned at t = 0.
        end: Value returned at t = 1.
        t: Interpolation parameter, clamped to [0, 1].

    Returns:
        start * (1 - t) + end * t
    """
    s = tm.clamp(t, 0.0, 1.0)
    return start * (1.0 - s) + end * s


@ti.func
def reflect(v: vec3, n: vec3) -> vec3:
    """Reflect v about the unit normal n: v - 2*dot(v, n)*n."""
    return v - 2.0 * dot(v, n) * n


@ti.func
def random_in_unit_sphere() -> vec3:
    """Draw a point uniformly distributed inside the unit ball.

    Rejection sampling: three independent uniform samples in [-1, 1] are drawn
    until the point falls strictly inside the ball. The acceptance rate is
    pi/6, so about 1.91 draws are needed on average. There is no
    iteration cap.

    Returns:
        A point p with squared_length(p) < 1.
    """
    # Start outside the ball so the loop always draws at least once
    p = vec3(1.0, 1.0, 1.0)
    while squared_length(p) >= 1.0:
        p = vec3(
            ti.random(ti.f32) * 2.0 - 1.0,
            ti.random(ti.f32) * 2.0 - 1.0,
            ti.random(ti.f32) * 2.0 - 1.0,
        )
    return p


def as_tuple(v) -> tuple[float, float, float]:
    """Convert a Taichi vector (or any 3-sequence) to a plain float tuple."""
    return (float(v[0]), float(v[1]), float(v[2]))
