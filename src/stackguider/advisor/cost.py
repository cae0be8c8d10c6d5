"""Rough monthly cost estimate for a recommended stack.

Prices are standard published tiers for the services a recommendation most
often maps to; technologies not in the table are left out of the estimate.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from stackguider.schemas.recommendation import Recommendation


class CostItem(BaseModel):
    category: str
    service: str
    monthly_cost: int  # USD
    tier: str


class CostEstimate(BaseModel):
    items: list[CostItem]

    @property
    def monthly_total(self) -> int:
        return sum(item.monthly_cost for item in self.items)

    @property
    def annual_total(self) -> int:
        return self.monthly_total * 12

    @property
    def paid_services(self) -> int:
        return sum(1 for item in self.items if item.monthly_cost > 0)


def _item(category: str, service: str, monthly_cost: int, tier: str) -> CostItem:
    return CostItem(category=category, service=service, monthly_cost=monthly_cost, tier=tier)


_NEON = _item("Database", "Neon", 19, "Scale")

PRICING: dict[str, CostItem] = {
    "Next.js": _item("Framework", "Next.js", 0, "Free"),
    "Vercel": _item("Hosting", "Vercel Pro", 20, "Pro"),
    "PostgreSQL": _NEON,
    "Neon": _NEON,
    "Neon DB": _NEON,
    "NeonDB": _NEON,
    "Stripe": _item("Payments", "Stripe", 0, "Pay as you go"),
    "MongoDB": _item("Database", "MongoDB Atlas", 25, "M10"),
    "Firebase": _item("Backend", "Firebase Blaze", 25, "Blaze"),
    "Supabase": _item("Backend", "Supabase Pro", 25, "Pro"),
    "Prisma": _item("ORM", "Prisma", 0, "Free"),
    "Drizzle": _item("ORM", "Drizzle ORM", 0, "Free"),
    "TypeScript": _item("Language", "TypeScript", 0, "Free"),
    "Tailwind CSS": _item("Styling", "Tailwind CSS", 0, "Free"),
    "React": _item("Framework", "React", 0, "Free"),
    "Node.js": _item("Runtime", "Node.js", 0, "Free"),
    "NextAuth": _item("Authentication", "NextAuth.js", 0, "Free"),
    "Clerk": _item("Authentication", "Clerk", 25, "Pro"),
}


def estimate_costs(recommendations: Iterable[Recommendation]) -> CostEstimate | None:
    """Price the recognised technologies; None when none are recognised."""
    items = [PRICING[rec.name] for rec in recommendations if rec.name in PRICING]
    if not items:
        return None
    return CostEstimate(items=items)
