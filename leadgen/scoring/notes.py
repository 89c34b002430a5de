"""Generate outreach guidance for scored prospects."""

from ..constants import ACTION_PLANS, NEXT_ACTIONS
from ..models import Prospect, Temperature


def next_action(score: int) -> str:
    """
    Suggest the next outreach step for a score.

    Args:
        score: Final prospect score

    Returns:
        Short instruction for the sales team
    """
    if score >= 85:
        return NEXT_ACTIONS["urgent"]
    if score >= 70:
        return NEXT_ACTIONS["follow_up"]
    return NEXT_ACTIONS["nurture"]


def action_plan(prospect: Prospect, temperature: Temperature) -> dict:
    """
    Build a contact plan: method, timeframe, message and follow-up schedule.

    Hot leads get a call (or a site visit when there is no phone), warm leads
    an email (or a call), cold leads an educational email.
    """
    template = ACTION_PLANS[temperature.value]

    if temperature is Temperature.HOT:
        method = "phone" if prospect.contact_phone else "visit"
    elif temperature is Temperature.WARM:
        method = "email" if prospect.contact_email else "phone"
    else:
        method = "email"

    return {
        "contact_method": method,
        "timeframe": template["timeframe"],
        "message": template["message"].format(name=prospect.business_name),
        "follow_up_schedule": list(template["follow_up"]),
    }
