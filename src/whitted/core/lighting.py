"""Light intensity at a surface point.

Evaluates the scalar illumination reaching a point from every light in the
scene (Phong model, no color per light):

    I = sum(ambient) + sum over visible lights of
        I_l * (N . L) / (|N| |L|)                  if N . L > 0
      + I_l * ((R . V) / (|R| |V|)) ^ specular     if specular != -1 and R . V > 0

where L points from the surface toward the light and R = 2N(N . L) - L.

A light is visible unless the shadow ray from the point toward it hits a
sphere. For point lights L spans exactly the distance to the light, so the
shadow ray is bounded to t < 1; directional lights are infinitely far away
and the shadow ray is unbounded. Shadows are binary.
"""

import math

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import reflect_ray
from src.whitted.scene.intersection import closest_intersection
from src.whitted.scene.lights import LightType
from src.whitted.scene.manager import NO_SPECULAR

# Type alias for 3D vectors
vec3 = tm.vec3

# Shadow ray upper bounds
POINT_LIGHT_T_MAX = 1.0
DIRECTIONAL_LIGHT_T_MAX = math.inf


@ti.func
def is_in_shadow(
    scene: ti.template(),
    point: vec3,
    light_direction: vec3,
    epsilon: ti.f32,
    t_max: ti.f32,
) -> ti.i32:
    """Test whether anything blocks the path from a point toward a light.

    Args:
        scene: The Scene to test against.
        point: The shaded surface point.
        light_direction: Vector from the point toward the light.
        epsilon: Lower bound on the shadow ray parameter, keeps the ray from
            re-hitting the surface it starts on.
        t_max: Upper bound on the shadow ray parameter.

    Returns:
        1 if the light is occluded, 0 otherwise.
    """
    record = closest_intersection(scene, point, light_direction, epsilon, t_max)
    return record.hit


@ti.func
def compute_lighting(
    scene: ti.template(),
    point: vec3,
    normal: vec3,
    view: vec3,
    specular: ti.f32,
    epsilon: ti.f32,
) -> ti.f32:
    """Compute the light intensity arriving at a surface point.

    Args:
        scene: The Scene providing lights and occluders.
        point: The shaded surface point.
        normal: Outward surface normal at the point (unit length).
        view: Vector from the point toward the viewer.
        specular: Shininess exponent, or -1 for no specular highlight.
        epsilon: Self-intersection offset for shadow rays.

    Returns:
        The non-negative scalar intensity.
    """
    intensity = 0.0

    for i in range(scene.light_count):
        light = scene.get_light(i)

        if light.kind == int(LightType.AMBIENT):
            intensity += light.intensity
        else:
            light_direction = light.vector
            t_max = DIRECTIONAL_LIGHT_T_MAX
            if light.kind == int(LightType.POINT):
                light_direction = light.vector - point
                t_max = POINT_LIGHT_T_MAX

            if is_in_shadow(scene, point, light_direction, epsilon, t_max) == 0:
                # Diffuse
                n_dot_l = tm.dot(normal, light_direction)
                if n_dot_l > 0.0:
                    intensity += (
                        light.intensity * n_dot_l / (tm.length(normal) * tm.length(light_direction))
                    )

                # Specular
                if specular != NO_SPECULAR:
                    reflected = reflect_ray(light_direction, normal)
                    r_dot_v = tm.dot(reflected, view)
                    if r_dot_v > 0.0:
                        cosine = r_dot_v / (tm.length(reflected) * tm.length(view))
                        intensity += light.intensity * cosine**specular

    return intensity
