"""
Beam section input/output models for ACI 318-19 flexural analysis.

Units: US customary (inches, psi, sq in, lb-in / kip-ft).
"""

from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class SectionType(str, Enum):
    """Ductility classification per ACI 318-19 Table 21.2.2."""
    TENSION_CONTROLLED = "tension-controlled"
    TRANSITION = "transition"
    COMPRESSION_CONTROLLED = "compression-controlled"


class Severity(str, Enum):
    """Severity of a design message."""
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class DesignWarning(BaseModel):
    """
    Single diagnostic produced by the beam analysis.

    Example:
        >>> w = DesignWarning(severity=Severity.NOTE, message="Section is in the transition zone.")
        >>> w.text
        'Note: Section is in the transition zone.'
    """
    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def text(self) -> str:
        """Display string with the severity label prefix."""
        return f"{self.severity.label}: {self.message}"


class BeamInput(BaseModel):
    """
    Rectangular beam section with tension (and optional compression) steel.

    No range constraints are enforced here: the analysis accepts degenerate
    values and reports them through the results. Use ``validate_beam_input``
    before analysis to screen user input.

    Attributes:
        b: Width (in)
        h: Total height (in)
        d: Effective depth to tension steel centroid (in)
        d_prime: Depth to compression steel (in)
        fc: Concrete compressive strength f'c (psi)
        fy: Steel yield strength (psi)
        Es: Steel modulus of elasticity (psi)
        As: Tension steel area (sq in)
        As_prime: Compression steel area (sq in)

    Example:
        >>> beam = BeamInput(b=12, h=24, d=21.5, fc=4000, fy=60000, As=3.0)
        >>> beam.Es
        29000000.0
    """
    model_config = ConfigDict(frozen=True)

    b: float = Field(..., description="Width (in)")
    h: float = Field(..., description="Total height (in)")
    d: float = Field(..., description="Effective depth (in)")
    d_prime: float = Field(default=0.0, description="Compression steel depth (in)")
    fc: float = Field(..., description="Concrete strength f'c (psi)")
    fy: float = Field(..., description="Steel yield strength (psi)")
    Es: float = Field(default=29_000_000.0, description="Steel modulus (psi)")
    As: float = Field(..., description="Tension steel area (sq in)")
    As_prime: float = Field(default=0.0, description="Compression steel area (sq in)")

    @property
    def is_valid(self) -> bool:
        """True when the section passes ``validate_beam_input``."""
        return not validate_beam_input(self)


class BeamResults(BaseModel):
    """
    Flexural analysis results for one ``BeamInput``.

    Moments are given in lb-in (``Mn``, ``phiMn``) and kip-ft
    (``Mn_kip_ft``, ``phiMn_kip_ft``). Non-finite values are allowed for
    degenerate sections (e.g. ``epsilon_t = inf`` when ``As = 0``).
    """
    model_config = ConfigDict(frozen=True)

    beta1: float
    a: float
    c: float

    epsilon_t: float
    epsilon_y: float
    epsilon_cu: float = 0.003

    rho: float
    rho_b: float
    rho_max: float
    rho_min: float

    Mn: float
    Mn_kip_ft: float
    phi: float
    phiMn: float
    phiMn_kip_ft: float

    section_type: SectionType

    is_adequately_reinforced: bool
    is_not_over_reinforced: bool
    steel_yields: bool

    warnings: List[DesignWarning] = Field(default_factory=list)

    @property
    def errors(self) -> List[DesignWarning]:
        return [w for w in self.warnings if w.is_error]

    @property
    def has_errors(self) -> bool:
        return any(w.is_error for w in self.warnings)

    @property
    def warning_texts(self) -> List[str]:
        return [w.text for w in self.warnings]


class RequiredSteelResult(BaseModel):
    """
    Outcome of the required-steel solver.

    Attributes:
        As_required: Required tension steel area (sq in), 0 when infeasible
        rho_required: Required reinforcement ratio
        is_valid: False when the section cannot carry the moment or the
            required ratio exceeds the maximum
        message: "OK" or the reason the result is not valid
    """
    model_config = ConfigDict(frozen=True)

    As_required: float
    rho_required: float = 0.0
    is_valid: bool
    message: str


def validate_beam_input(beam: BeamInput) -> List[str]:
    """
    Check the preconditions the analysis expects of its input.

    Args:
        beam: Section to screen

    Returns:
        List of problems; empty when the section may be analyzed
    """
    problems = []
    for name, label in (
        ("b", "Width b"),
        ("h", "Height h"),
        ("d", "Effective depth d"),
        ("fc", "Concrete strength f'c"),
        ("fy", "Yield strength fy"),
        ("Es", "Steel modulus Es"),
        ("As", "Tension steel As"),
    ):
        value = getattr(beam, name)
        if not value > 0:
            problems.append(f"{label} = {value} must be positive")

    if beam.d > beam.h:
        problems.append(f"Effective depth d = {beam.d} exceeds height h = {beam.h}")
    if beam.d_prime < 0:
        problems.append(f"Compression steel depth d' = {beam.d_prime} must not be negative")
    if beam.As_prime < 0:
        problems.append(f"Compression steel A's = {beam.As_prime} must not be negative")

    return problems
