"""Unit tests for ray-sphere intersection.

Tests cover:
- Nearest root chosen from outside
- Far root used when the ray starts inside
- Misses and tangent rays
- Open interval bounds
- Outward normal of unit length
"""

import taichi as ti


def _run_hit(origin, direction, center, radius, t_min=0.001, t_max=1.0e30):
    from pathtracer.core.ray import make_ray
    from pathtracer.core.vector import vec3
    from pathtracer.geometry.sphere import Sphere, hit_sphere

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    position = ti.Vector.field(3, dtype=ti.f32, shape=())
    normal = ti.Vector.field(3, dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(o: vec3, d: vec3, c: vec3, r: ti.f32, lo: ti.f32, hi: ti.f32):
        rec = hit_sphere(make_ray(o, d), Sphere(center=c, radius=r), lo, hi)
        hit[None] = rec.hit
        t_val[None] = rec.t
        position[None] = rec.position
        normal[None] = rec.normal

    test_kernel(vec3(*origin), vec3(*direction), vec3(*center), radius, t_min, t_max)
    return hit[None], t_val[None], position[None], normal[None]


class TestSphereIntersection:
    """Tests for hit_sphere."""

    def test_hit_from_outside_takes_near_root(self):
        """A ray from the origin hits the unit-half sphere at z=-0.5."""
        hit, t, p, n = _run_hit((0, 0, 0), (0, 0, -1), (0, 0, -1), 0.5)
        assert hit == 1
        assert abs(t - 0.5) < 1e-5
        assert abs(p[2] + 0.5) < 1e-5
        assert abs(n[2] - 1.0) < 1e-5

    def test_unnormalized_direction(self):
        """t is measured in units of the direction vector."""
        hit, t, p, _ = _run_hit((0, 0, 0), (0, 0, -2), (0, 0, -1), 0.5)
        assert hit == 1
        assert abs(t - 0.25) < 1e-5
        assert abs(p[2] + 0.5) < 1e-5

    def test_miss(self):
        """A ray pointing away from the sphere misses."""
        hit, _, _, _ = _run_hit((0, 0, 0), (0, 1, 0), (0, 0, -1), 0.5)
        assert hit == 0

    def test_tangent_ray_misses(self):
        """A zero discriminant does not count as a hit."""
        hit, _, _, _ = _run_hit((0.5, 0, 0), (0, 0, -1), (0, 0, -1), 0.5)
        assert hit == 0

    def test_inside_uses_far_root(self):
        """A ray starting at the center exits through the far side."""
        hit, t, p, n = _run_hit((0, 0, -1), (0, 0, -1), (0, 0, -1), 0.5)
        assert hit == 1
        assert abs(t - 0.5) < 1e-5
        assert abs(p[2] + 1.5) < 1e-5
        # Outward normal, not flipped toward the ray
        assert abs(n[2] + 1.0) < 1e-5

    def test_t_max_excludes_hit(self):
        """A hit beyond t_max is rejected."""
        hit, _, _, _ = _run_hit((0, 0, 0), (0, 0, -1), (0, 0, -5), 0.5, t_max=1.0)
        assert hit == 0

    def test_t_min_skips_near_root(self):
        """When the near root is below t_min the far root is used."""
        hit, t, _, _ = _run_hit((0, 0, 0), (0, 0, -1), (0, 0, -1), 0.5, t_min=0.6)
        assert hit == 1
        assert abs(t - 1.5) < 1e-5

    def test_normal_is_unit_length(self):
        """The normal of an off-axis hit has unit length."""
        hit, _, _, n = _run_hit((0, 0, 0), (0.2, 0.1, -1), (0, 0, -3), 2.0)
        assert hit == 1
        assert abs((n[0] ** 2 + n[1] ** 2 + n[2] ** 2) - 1.0) < 1e-4

    def test_unit_sphere_front_hit(self):
        """From (0,0,2) toward -z the unit sphere is hit at (0,0,1)."""
        hit, t, p, n = _run_hit((0, 0, 2), (0, 0, -1), (0, 0, 0), 1.0)
        assert hit == 1
        assert abs(t - 1.0) < 1e-5
        assert abs(p[2] - 1.0) < 1e-5
        assert abs(n[2] - 1.0) < 1e-5
