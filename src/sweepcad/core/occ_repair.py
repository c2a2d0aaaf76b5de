"""
Topology repair for boolean results from the build123d kernel.

Folding thousands of frustums leaves OpenCascade with many nearly coincident
faces; an occasional fuse or cut comes back with invalid topology. The
strategies here are tried in order, cheapest first, and the first valid
result wins.
"""

import logging

from OCP.BRepBuilderAPI import BRepBuilderAPI_MakeSolid, BRepBuilderAPI_Sewing
from OCP.ShapeFix import ShapeFix_Shape, ShapeFix_Solid
from OCP.ShapeUpgrade import ShapeUpgrade_UnifySameDomain
from OCP.TopAbs import TopAbs_FACE, TopAbs_SHELL
from OCP.TopExp import TopExp_Explorer
from OCP.TopoDS import TopoDS

from build123d import Part

logger = logging.getLogger(__name__)

# Sewing tolerance in mm
SEWING_TOLERANCE = 1e-6


def _unify(shape):
    unifier = ShapeUpgrade_UnifySameDomain(shape, True, True, True)
    unifier.Build()
    return unifier.Shape()


def _shape_fix(shape):
    fixer = ShapeFix_Shape(shape)
    fixer.Perform()
    return fixer.Shape()


def _sew_solid(shape):
    """Sew every face back into shells and rebuild one solid from all of them.

    Every shell is kept: interior channel voids are shells of their own.
    Returns None when sewing yields no shell.
    """
    sewer = BRepBuilderAPI_Sewing(SEWING_TOLERANCE)
    faces = TopExp_Explorer(shape, TopAbs_FACE)
    while faces.More():
        sewer.Add(faces.Current())
        faces.Next()
    sewer.Perform()

    maker = BRepBuilderAPI_MakeSolid()
    shells = TopExp_Explorer(sewer.SewedShape(), TopAbs_SHELL)
    shell_count = 0
    while shells.More():
        maker.Add(TopoDS.Shell_s(shells.Current()))
        shell_count += 1
        shells.Next()
    if shell_count == 0 or not maker.IsDone():
        return None

    solid_fixer = ShapeFix_Solid(maker.Solid())
    solid_fixer.Perform()
    return solid_fixer.Solid()


def repair_solid(part: Part, description: str = "") -> Part:
    """
    Multi-strategy repair for invalid topology after a boolean operation.

    1. UnifySameDomain: merge faces sharing the same underlying surface.
    2. ShapeFix_Shape on the unified shape.
    3. Sew + MakeSolid over every shell, then ShapeFix_Solid.

    Args:
        part: Boolean result to repair
        description: Label for log messages

    Returns:
        The first valid candidate, or ``part`` unchanged if none is valid.
        Callers decide whether an unrepaired result is fatal.
    """
    if part.is_valid:
        return part

    label = description or "shape"
    try:
        unified = _unify(part.wrapped)
        result = Part(unified)
        if result.is_valid:
            logger.debug(f"Repaired {label} (unify)")
            return result

        result = Part(_shape_fix(unified))
        if result.is_valid:
            logger.debug(f"Repaired {label} (ShapeFix)")
            return result

        sewn = _sew_solid(unified)
        if sewn is not None:
            result = Part(sewn)
            if result.is_valid:
                logger.debug(f"Repaired {label} (sew + solid)")
                return result
    except Exception as e:
        logger.warning(f"Repair of {label} failed: {e}")
        return part

    logger.debug(f"Repair did not produce a valid {label}")
    return part
