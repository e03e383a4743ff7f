"""
Typed payloads for labor rules.

Labor rules are stored as free-form JSON keyed by ``rule_type``. Known rule
types are parsed into their own model; anything else is kept as an
``OpaqueRule`` so new rule types never break the evaluator.
"""
import json
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from utils.exceptions import LaborRuleFormatException

class TechnicianRatioRule(BaseModel):
    """How many attendees one technician covers"""
    rule_type: Literal["technician_ratio"] = "technician_ratio"
    attendees_per_tech: int = Field(..., gt=0, description="Attendees covered by one technician")
    minimum_techs: int = Field(1, ge=1, description="Floor on the technician count")

class SetupTimeRule(BaseModel):
    """Setup hours per equipment category plus breakdown hours.

    Unset fields fall back to the configured defaults.
    """
    rule_type: Literal["setup_time"] = "setup_time"
    audio_setup: Optional[float] = Field(None, ge=0)
    video_setup: Optional[float] = Field(None, ge=0)
    lighting_setup: Optional[float] = Field(None, ge=0)
    breakdown: Optional[float] = Field(None, ge=0)

class UnionRequirementsRule(BaseModel):
    """Property-wide union terms; extra keys are kept as-is"""
    model_config = ConfigDict(extra="allow")

    rule_type: Literal["union_requirements"] = "union_requirements"
    overtime_threshold: Optional[float] = Field(None, ge=0, description="Hours before overtime applies")
    requires_union: bool = False

class OpaqueRule(BaseModel):
    """A rule type the engine does not interpret"""
    rule_type: str
    raw_data: str
    data: Any = None

LaborRulePayload = Union[TechnicianRatioRule, SetupTimeRule, UnionRequirementsRule, OpaqueRule]

RULE_PAYLOADS = {
    "technician_ratio": TechnicianRatioRule,
    "setup_time": SetupTimeRule,
    "union_requirements": UnionRequirementsRule,
}

def parse_labor_rule(rule_type: str, rule_data) -> LaborRulePayload:
    """
    Parse a stored rule into its typed payload.

    Args:
        rule_type (str): Discriminant stored next to the payload
        rule_data (str | dict): JSON text (as stored) or an already decoded dict

    Returns:
        LaborRulePayload: Typed payload, or OpaqueRule for unknown rule types

    Raises:
        LaborRuleFormatException: payload is not valid JSON or does not fit the rule type
    """
    if isinstance(rule_data, (str, bytes)):
        raw = rule_data if isinstance(rule_data, str) else rule_data.decode("utf-8", errors="replace")
        try:
            data = json.loads(rule_data)
        except (TypeError, ValueError) as e:
            raise LaborRuleFormatException(
                f"Invalid labor rule format for {rule_type}",
                error_code="INVALID_RULE_JSON",
                context={"rule_type": rule_type, "error": str(e)}
            ) from e
    elif rule_data is None:
        raise LaborRuleFormatException(
            f"Invalid labor rule format for {rule_type}",
            error_code="MISSING_RULE_DATA",
            context={"rule_type": rule_type}
        )
    else:
        data = rule_data
        raw = json.dumps(rule_data)

    model = RULE_PAYLOADS.get(rule_type)
    if model is None:
        return OpaqueRule(rule_type=rule_type, raw_data=raw, data=data)

    if not isinstance(data, dict):
        raise LaborRuleFormatException(
            f"Invalid labor rule format for {rule_type}",
            error_code="RULE_NOT_OBJECT",
            context={"rule_type": rule_type}
        )

    try:
        return model.model_validate({**data, "rule_type": rule_type})
    except ValidationError as e:
        raise LaborRuleFormatException(
            f"Invalid labor rule format for {rule_type}",
            error_code="RULE_SHAPE_INVALID",
            context={"rule_type": rule_type, "error": str(e)}
        ) from e

def rule_payload_data(payload: LaborRulePayload) -> Dict[str, Any]:
    """Inverse of parse_labor_rule: the JSON object the payload was built from"""
    if isinstance(payload, OpaqueRule):
        return payload.data
    return payload.model_dump(exclude={"rule_type"}, exclude_none=True)
