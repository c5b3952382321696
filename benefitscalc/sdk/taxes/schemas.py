"""Pydantic schemas for state and local tax tables.

These schemas validate the data/state_tax/*.yaml and data/local_tax.yaml
files and give typed, read-only access to their parameters.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StateTaxBracket(BaseModel):
    """Single marginal bracket: `rate` applies to income above `over`."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    over: float = Field(..., ge=0, description="Lower bound of the bracket")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")


class StateTaxConfig(BaseModel):
    """Income tax parameters for one state."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    method: Literal["none", "flat", "brackets"]
    flat_rate: Optional[float] = Field(default=None, ge=0, le=1)
    standard_deduction: float = Field(default=0, ge=0)
    # Reference only; not applied to the calculation
    personal_exemption: float = Field(default=0, ge=0)
    dependent_exemption: float = Field(default=0, ge=0)
    brackets: Optional[tuple[StateTaxBracket, ...]] = None

    @model_validator(mode="after")
    def check_method_params(self) -> "StateTaxConfig":
        """Each method must carry the parameters it uses."""
        if self.method == "flat" and self.flat_rate is None:
            raise ValueError("flat method requires flat_rate")

        if self.method == "brackets":
            if not self.brackets:
                raise ValueError("brackets method requires at least one bracket")
            thresholds = [b.over for b in self.brackets]
            if thresholds[0] != 0:
                raise ValueError(f"first bracket must start at 0, got {thresholds[0]}")
            for lower, upper in zip(thresholds, thresholds[1:]):
                if upper <= lower:
                    raise ValueError(
                        f"bracket thresholds must strictly increase ({lower} then {upper})"
                    )
        return self


class StateTaxTable(BaseModel):
    """All state configurations for a tax year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int
    states: dict[str, StateTaxConfig]

    @model_validator(mode="after")
    def check_state_codes(self) -> "StateTaxTable":
        """State keys are two-letter upper-case codes."""
        for code in self.states:
            if len(code) != 2 or not code.isalpha() or not code.isupper():
                raise ValueError(f"invalid state code: {code!r}")
        return self

    def get(self, state_code: Optional[str]) -> Optional[StateTaxConfig]:
        """Look up a state (case-insensitive). None if unknown."""
        return self.states.get((state_code or "").strip().upper())


class LocalTaxConfig(BaseModel):
    """Local (city/county) income tax for one jurisdiction."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    city: str
    resident_rate: float = Field(..., ge=0, le=1)
    non_resident_rate: float = Field(..., ge=0, le=1)
    tax_type: Literal["income", "earned_income", "wage"]
    notes: Optional[str] = None


class LocalTaxTable(BaseModel):
    """Local tax jurisdictions keyed by state then upper-case name."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    states: dict[str, dict[str, LocalTaxConfig]]
