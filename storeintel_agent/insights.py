from __future__ import annotations

from .models import Metrics, StoreSnapshot

DESIGN_STRONG_ABOVE = 80
DESIGN_WEAK_BELOW = 50
LARGE_CATALOG_ABOVE = 100
SMALL_CATALOG_BELOW = 20

SOCIAL_PROOF_MIN = 3
DESIGN_FIX_BELOW = 70
DISCOUNT_RATIO_MIN = 0.1

INSIGHT_DESIGN_STRONG = "🎨 Excellent store design with strong user experience"
INSIGHT_DESIGN_WEAK = "⚠️ Store design needs improvement for better conversions"
INSIGHT_LARGE_CATALOG = "📦 Large product catalog - good for SEO and customer choice"
INSIGHT_SMALL_CATALOG = "📦 Limited product range - consider expanding catalog"
INSIGHT_EMAIL_CAPTURE = "📧 Smart email capture strategy in place"
INSIGHT_NO_EMAIL_CAPTURE = "📧 Missing email capture - losing potential customers"
INSIGHT_LIVE_CHAT = "💬 Live chat support enhances customer service"
INSIGHT_URGENCY = "⏰ Using urgency messaging to drive conversions"

OPPORTUNITY_EMAIL_CAPTURE = "Add email popup to capture 15-25% more leads"
OPPORTUNITY_LIVE_CHAT = "Install live chat to increase conversion by 12%"
OPPORTUNITY_GUARANTEE = "Add money-back guarantee to reduce purchase hesitation"
OPPORTUNITY_SOCIAL_PROOF = "Display more customer testimonials and reviews"
OPPORTUNITY_URGENCY = "Add urgency messaging (limited time offers, stock counters)"
OPPORTUNITY_SPEED_MOBILE = "Improve page load speed and mobile optimization"
OPPORTUNITY_DISCOUNTING = "Consider strategic discounting to increase average order value"


def generate_insights(snapshot: StoreSnapshot, metrics: Metrics) -> list[str]:
    """Observations about what the store does well or poorly, in a fixed order."""
    insights: list[str] = []

    if metrics.design_score > DESIGN_STRONG_ABOVE:
        insights.append(INSIGHT_DESIGN_STRONG)
    elif metrics.design_score < DESIGN_WEAK_BELOW:
        insights.append(INSIGHT_DESIGN_WEAK)

    if snapshot.product_count > LARGE_CATALOG_ABOVE:
        insights.append(INSIGHT_LARGE_CATALOG)
    elif snapshot.product_count < SMALL_CATALOG_BELOW:
        insights.append(INSIGHT_SMALL_CATALOG)

    if snapshot.has_email_capture:
        insights.append(INSIGHT_EMAIL_CAPTURE)
    else:
        insights.append(INSIGHT_NO_EMAIL_CAPTURE)

    if snapshot.has_chat_widget:
        insights.append(INSIGHT_LIVE_CHAT)

    if snapshot.has_urgency_messages:
        insights.append(INSIGHT_URGENCY)

    return insights


def discount_ratio(snapshot: StoreSnapshot) -> float:
    # Unfiltered listings; an empty list counts as a denominator of 1.
    discounted = sum(1 for p in snapshot.products if p.has_discount)
    return discounted / max(len(snapshot.products), 1)


def identify_opportunities(snapshot: StoreSnapshot, metrics: Metrics) -> list[str]:
    """Recommendations for each detected gap. Independent of generate_insights."""
    opportunities: list[str] = []

    if not snapshot.has_email_capture:
        opportunities.append(OPPORTUNITY_EMAIL_CAPTURE)
    if not snapshot.has_chat_widget:
        opportunities.append(OPPORTUNITY_LIVE_CHAT)
    if not snapshot.has_guarantees:
        opportunities.append(OPPORTUNITY_GUARANTEE)
    if snapshot.social_proof_count < SOCIAL_PROOF_MIN:
        opportunities.append(OPPORTUNITY_SOCIAL_PROOF)
    if not snapshot.has_urgency_messages:
        opportunities.append(OPPORTUNITY_URGENCY)
    if metrics.design_score < DESIGN_FIX_BELOW:
        opportunities.append(OPPORTUNITY_SPEED_MOBILE)
    if discount_ratio(snapshot) < DISCOUNT_RATIO_MIN:
        opportunities.append(OPPORTUNITY_DISCOUNTING)

    return opportunities
