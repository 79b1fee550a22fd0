from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class TemplateStyle(str, Enum):
    GRADIENT = "gradient"
    GEOMETRIC = "geometric"
    MINIMAL = "minimal"
    CLASSIC = "classic"
    MODERN = "modern"


@dataclass(frozen=True)
class Template:
    id: str
    name: str
    description: str
    primary_color: str
    secondary_color: str
    accent_color: str
    style: TemplateStyle


# Ids must match the rendering backend's template keys.
TEMPLATES: List[Template] = [
    Template("corporate", "Corporate Professional",
             "Clean and professional design for business presentations",
             "#1E3A8A", "#3B82F6", "#F3F4F6", TemplateStyle.CLASSIC),
    Template("creative", "Creative Bold",
             "Vibrant and eye-catching design for creative presentations",
             "#8B5CF6", "#EC4899", "#FBBF24", TemplateStyle.GEOMETRIC),
    Template("academic", "Academic Classic",
             "Traditional and scholarly design for academic presentations",
             "#1E40AF", "#FBBF24", "#FEF3C7", TemplateStyle.CLASSIC),
    Template("minimal", "Minimal Modern",
             "Sleek and contemporary design with minimalist aesthetics",
             "#000000", "#10B981", "#D1D5DB", TemplateStyle.MINIMAL),
    Template("warm", "Warm & Friendly",
             "Inviting and approachable design with warm colors",
             "#F97316", "#059669", "#FEF3C7", TemplateStyle.MODERN),
    Template("tech", "Tech Startup",
             "Modern gradient design for technology and innovation",
             "#4F46E5", "#7C3AED", "#93C5FD", TemplateStyle.GRADIENT),
    Template("nature", "Nature Eco",
             "Earth-friendly green design for environmental topics",
             "#166534", "#84CC16", "#FEF08A", TemplateStyle.MODERN),
    Template("luxury", "Luxury Premium",
             "Elegant gold and dark design for high-end presentations",
             "#1F2937", "#D97706", "#FDE047", TemplateStyle.CLASSIC),
    Template("vibrant", "Vibrant Energy",
             "Bright and energetic multi-color scheme",
             "#DB2777", "#EA580C", "#A855F7", TemplateStyle.GEOMETRIC),
    Template("monochrome", "Monochrome Elegant",
             "Sophisticated black and white design",
             "#111827", "#6B7280", "#D1D5DB", TemplateStyle.MINIMAL),
    Template("sunset", "Sunset Glow",
             "Warm sunset colors with orange, pink, and coral",
             "#EF4444", "#FB923C", "#FCD34D", TemplateStyle.GRADIENT),
    Template("ocean", "Ocean Blue",
             "Cool and calming ocean blues and teals",
             "#0891B2", "#0EA5E9", "#67E8F9", TemplateStyle.GRADIENT),
    Template("dark", "Professional Dark",
             "Modern dark mode business theme",
             "#1E293B", "#475569", "#94A3B8", TemplateStyle.MODERN),
    Template("pastel", "Pastel Soft",
             "Gentle and calming pastel color scheme",
             "#A78BFA", "#FBCFE8", "#C4B5FD", TemplateStyle.MODERN),
    Template("retro", "Retro Vintage",
             "Classic 80s/90s inspired color palette",
             "#EC4899", "#A855F7", "#2DD4BF", TemplateStyle.GEOMETRIC),
]

DEFAULT_TEMPLATE = TEMPLATES[0]

_BY_ID: Dict[str, Template] = {t.id: t for t in TEMPLATES}


def template_by_id(template_id: Optional[str]) -> Optional[Template]:
    if not template_id:
        return None
    return _BY_ID.get(template_id)
