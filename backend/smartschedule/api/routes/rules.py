from fastapi import APIRouter, Depends

from smartschedule.core.config import Settings, get_settings
from smartschedule.schemas.scheduling import InterpretRulesRequest, RuleSettings
from smartschedule.services.rule_interpreter import baseline_rule_settings, interpret_rules

router = APIRouter()


@router.post("/interpret", response_model=RuleSettings)
def interpret(
    payload: InterpretRulesRequest,
    settings: Settings = Depends(get_settings),
) -> RuleSettings:
    return interpret_rules(payload.rules, baseline=baseline_rule_settings(settings))
