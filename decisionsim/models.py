from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
    model_validator,
)

DecisionType = Literal["car", "investment", "travel", "property", "education", "business"]
RiskLevel = Literal["low", "medium", "high"]


class UserProfile(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False, frozen=True)

    currentSavings: float = Field(ge=0)
    monthlyIncome: float = Field(ge=0)
    monthlyExpenses: float = Field(ge=0)
    financialGoals: List[str] = Field(default_factory=list)

    @field_validator("financialGoals")
    @classmethod
    def dedupe_goals(cls, goals: List[str]) -> List[str]:
        # goals are a set of tags; keep first-seen order
        return list(dict.fromkeys(goals))


def profile_warnings(profile: UserProfile) -> List[str]:
    """Non-blocking remarks about a profile (it can still be saved)."""
    warnings: List[str] = []
    if profile.monthlyExpenses > profile.monthlyIncome:
        warnings.append("monthly expenses exceed monthly income")
    return warnings


class _DataBase(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False, frozen=True)


class LoanData(_DataBase):
    """Shared by car and property: a price, optionally financed over loanMonths.

    When downPayment is omitted it defaults to the full price for a cash
    purchase (no loanMonths) and to 0 for a financed one.
    """

    price: float = Field(ge=0)
    downPayment: Optional[float] = Field(default=None, ge=0)
    loanMonths: int = Field(default=0, ge=0)
    interestRate: float = Field(default=0.0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def default_down_payment(cls, values: Any) -> Any:
        if isinstance(values, dict) and values.get("downPayment") is None and "price" in values:
            values = dict(values)
            values["downPayment"] = values["price"] if not values.get("loanMonths") else 0.0
        return values

    @model_validator(mode="after")
    def check_financing(self) -> "LoanData":
        if self.downPayment > self.price:
            raise ValueError("downPayment must not exceed price")
        if self.financed > 0 and self.loanMonths == 0:
            raise ValueError("loanMonths is required when part of the price is financed")
        return self

    @property
    def financed(self) -> float:
        return self.price - self.downPayment


class CarData(LoanData):
    monthlyMaintenance: float = Field(default=0.0, ge=0)
    # charged once a year, on months that are a multiple of 12
    insurance: float = Field(default=0.0, ge=0)


class PropertyData(LoanData):
    monthlyFees: float = Field(default=0.0, ge=0)


class InvestmentData(_DataBase):
    initialAmount: Optional[float] = Field(default=None, ge=0)
    price: Optional[float] = Field(default=None, ge=0)
    monthlyContribution: float = Field(default=0.0, ge=0)
    annualReturn: float = Field(default=0.0)
    riskLevel: RiskLevel = "low"

    @property
    def principal(self) -> float:
        if self.initialAmount is not None:
            return self.initialAmount
        return self.price or 0.0


class InstallmentData(_DataBase):
    """monthlyPayment for duration months when both are set, else a lump totalCost at month 0."""

    totalCost: float = Field(default=0.0, ge=0)
    monthlyPayment: Optional[float] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, ge=0)

    @property
    def pays_in_installments(self) -> bool:
        return bool(self.monthlyPayment) and bool(self.duration)


class TravelData(InstallmentData):
    pass


class EducationData(InstallmentData):
    pass


class BusinessData(_DataBase):
    initialInvestment: float = Field(default=0.0, ge=0)
    monthlyExpenses: float = Field(default=0.0, ge=0)
    monthlyRevenue: float = Field(default=0.0, ge=0)
    # the owner's own estimate; break_even_month() computes the real one
    breakEvenMonth: Optional[int] = Field(default=None, ge=0)


class DecisionBase(BaseModel):
    """A decision of any type. Types outside the six known ones have no cost."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    type: str
    data: Optional[_DataBase] = None


class CarDecision(DecisionBase):
    type: Literal["car"]
    data: CarData


class InvestmentDecision(DecisionBase):
    type: Literal["investment"]
    data: InvestmentData = Field(default_factory=InvestmentData)


class TravelDecision(DecisionBase):
    type: Literal["travel"]
    data: TravelData = Field(default_factory=TravelData)


class PropertyDecision(DecisionBase):
    type: Literal["property"]
    data: PropertyData


class EducationDecision(DecisionBase):
    type: Literal["education"]
    data: EducationData = Field(default_factory=EducationData)


class BusinessDecision(DecisionBase):
    type: Literal["business"]
    data: BusinessData = Field(default_factory=BusinessData)


class OtherDecision(DecisionBase):
    """Any type outside the six known ones. Parsed so it can be stored and
    projected, but it has no cost and its data bag is kept as-is."""

    data: Optional[Dict[str, Any]] = None


KNOWN_DECISION_TYPES = get_args(DecisionType)
OTHER_TAG = "other"


def _decision_tag(value: Any) -> Optional[str]:
    tag = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if tag is None:
        return None
    return tag if tag in KNOWN_DECISION_TYPES else OTHER_TAG


Decision = Annotated[
    Union[
        Annotated[CarDecision, Tag("car")],
        Annotated[InvestmentDecision, Tag("investment")],
        Annotated[TravelDecision, Tag("travel")],
        Annotated[PropertyDecision, Tag("property")],
        Annotated[EducationDecision, Tag("education")],
        Annotated[BusinessDecision, Tag("business")],
        Annotated[OtherDecision, Tag(OTHER_TAG)],
    ],
    Discriminator(_decision_tag),
]

_decision_adapter: TypeAdapter = TypeAdapter(Decision)


def parse_decision(payload: Any) -> DecisionBase:
    """Validate a raw `{name, type, data}` mapping into its typed decision record."""
    return _decision_adapter.validate_python(payload)


__all__ = [
    "DecisionType",
    "RiskLevel",
    "UserProfile",
    "profile_warnings",
    "LoanData",
    "CarData",
    "PropertyData",
    "InvestmentData",
    "InstallmentData",
    "TravelData",
    "EducationData",
    "BusinessData",
    "DecisionBase",
    "CarDecision",
    "InvestmentDecision",
    "TravelDecision",
    "PropertyDecision",
    "EducationDecision",
    "BusinessDecision",
    "OtherDecision",
    "KNOWN_DECISION_TYPES",
    "Decision",
    "parse_decision",
]
