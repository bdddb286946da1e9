"""
ACI 318-19 material catalogue loaded from YAML.

Reference data for the input form: standard concrete strengths, steel
grades, US rebar areas and the default trial section.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .models import BeamInput

logger = logging.getLogger(__name__)


class SteelGradeACI(BaseModel):
    """
    Reinforcing steel grade per ACI 318-19 Section 20.2.2.

    Example:
        >>> steel = MaterialLoaderACI.get_steel("Grade 60")
        >>> steel.fy
        60000.0
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Grade designation")
    fy: float = Field(..., gt=0, description="Yield strength (psi)")
    Es: float = Field(default=29_000_000.0, gt=0, description="Modulus of elasticity (psi)")

    @property
    def epsilon_y(self) -> float:
        """Yield strain fy/Es."""
        return self.fy / self.Es


def _load_aci_materials() -> Dict[str, Any]:
    """Load ACI material catalogue from the packaged YAML file."""
    yaml_path = Path(__file__).parent.parent / "data" / "materials_aci318.yaml"
    with open(yaml_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    logger.debug("Loaded ACI material catalogue from %s", yaml_path)
    return data


# Load catalogue on module import
_ACI_MATERIALS = _load_aci_materials()


class MaterialLoaderACI:
    """Material loader for ACI grades and rebar sizes from YAML data."""

    @staticmethod
    def list_concrete_strengths() -> List[float]:
        """Standard concrete strengths f'c (psi)."""
        return [float(fc) for fc in _ACI_MATERIALS['concrete']]

    @staticmethod
    def get_steel(grade_name: str) -> SteelGradeACI:
        """
        Get steel grade by name.

        Args:
            grade_name: Grade identifier (e.g., "Grade60", "Grade 60 (60 ksi)")

        Returns:
            SteelGradeACI instance with properties from YAML

        Raises:
            ValueError: If the grade is not in the catalogue
        """
        # "Grade 60 (60 ksi)" -> "Grade60"
        normalized = grade_name.split('(')[0].replace(' ', '')

        if normalized not in _ACI_MATERIALS['steel']:
            available = list(_ACI_MATERIALS['steel'].keys())
            raise ValueError(f"Unknown ACI steel grade: {grade_name}. Available: {available}")

        props = _ACI_MATERIALS['steel'][normalized]
        return SteelGradeACI(name=normalized, fy=props['fy'], Es=props['Es'])

    @staticmethod
    def list_steel_grades() -> List[str]:
        """Get list of available steel grades."""
        return list(_ACI_MATERIALS['steel'].keys())

    @staticmethod
    def get_rebar_area(bar_size: str) -> float:
        """
        Nominal area of a single US bar.

        Raises:
            ValueError: If the bar size is not in the catalogue
        """
        key = bar_size.strip()
        if not key.startswith('#'):
            key = '#' + key

        if key not in _ACI_MATERIALS['rebar']:
            available = list(_ACI_MATERIALS['rebar'].keys())
            raise ValueError(f"Unknown bar size: {bar_size}. Available: {available}")
        return float(_ACI_MATERIALS['rebar'][key])

    @staticmethod
    def list_rebar_sizes() -> List[str]:
        return list(_ACI_MATERIALS['rebar'].keys())

    @staticmethod
    def total_steel_area(bar_size: str, count: int) -> float:
        """Total area of ``count`` bars of ``bar_size`` (sq in)."""
        if count < 0:
            raise ValueError(f"Bar count must not be negative, got {count}")
        return MaterialLoaderACI.get_rebar_area(bar_size) * count

    @staticmethod
    def estimate_effective_depth(h: float) -> Optional[float]:
        """
        Estimate d as h minus the catalogue offset, rounded to 0.01 in.

        Returns:
            Estimated d, or None when the estimate is not positive
        """
        offset = MaterialLoaderACI.get_parameters().get('effective_depth_offset', 2.5)
        estimated = h - offset
        if estimated <= 0:
            return None
        return round(estimated, 2)

    @staticmethod
    def default_beam_input() -> BeamInput:
        """Default trial section (12x24 in, 3 #9 bars, 4000 psi, Grade 60)."""
        return BeamInput(**_ACI_MATERIALS['defaults'])

    @staticmethod
    def get_parameters() -> Dict[str, Any]:
        """Get design parameters from YAML."""
        return _ACI_MATERIALS.get('parameters', {})
