"""
Outreach wording for scored prospects.

Kept separate from scoring so the sales team can reword messages without
touching thresholds.
"""

# Next action by score band
NEXT_ACTIONS = {
    "urgent": "Contact within 24 hours - compliance urgency",
    "follow_up": "Schedule follow-up call within 1 week",
    "nurture": "Add to nurture campaign",
}


# Contact plan templates by temperature
ACTION_PLANS = {
    "hot": {
        "timeframe": "48h",
        "message": (
            "{name} is overdue or at risk for backflow testing. "
            "Compliance violation likely - immediate action required."
        ),
        "follow_up": (
            "Day 1: Phone call",
            "Day 2: Site visit if no response",
            "Day 3: Follow-up email with compliance info",
        ),
    },
    "warm": {
        "timeframe": "1week",
        "message": (
            "Professional backflow testing services available for {name}. "
            "Ensure compliance and avoid penalties."
        ),
        "follow_up": (
            "Week 1: Initial contact",
            "Week 2: Follow-up call",
            "Week 4: Site visit offer",
        ),
    },
    "cold": {
        "timeframe": "2weeks",
        "message": "Educational outreach about backflow testing requirements and benefits for {name}.",
        "follow_up": (
            "Month 1: Educational email",
            "Month 3: Service reminder",
            "Month 6: Compliance check-in",
        ),
    },
}


# Console messages
MESSAGES = {
    "no_prospects": "No prospects qualified.",
    "geocode_failed": "Could not geocode address; distance unknown.",
    "outside_radius": "Outside service radius.",
}
