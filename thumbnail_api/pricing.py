from typing import List

from pydantic import BaseModel


class PricingPlan(BaseModel):
    name: str
    price: int
    period: str
    features: List[str]
    most_popular: bool = False


PRICING_PLANS = (
    PricingPlan(
        name="Basic",
        price=29,
        period="month",
        features=[
            "50 AI Thumbnails per month",
            "Basic Templates access",
            "Standard Resolution downloads",
            "No watermark",
            "Email Support",
        ],
    ),
    PricingPlan(
        name="Pro",
        price=79,
        period="month",
        features=[
            "Unlimited AI Thumbnails",
            "Premium Templates access",
            "4K Resolution downloads",
            "A/B Testing features",
            "Priority Email Support",
            "Custom Fonts",
            "Brand Kit Analysis",
        ],
        most_popular=True,
    ),
    PricingPlan(
        name="Enterprise",
        price=199,
        period="month",
        features=[
            "Everything in Pro",
            "API Access",
            "Team Collaboration",
            "Custom Branding",
            "Dedicated Account Manager",
        ],
    ),
)
