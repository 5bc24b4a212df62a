from __future__ import annotations

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict


class DiseaseEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str  # normalized, lowercase
    title: str
    summary: str
    advice: str

    @property
    def description(self) -> str:
        lines = (f"{self.title}:", self.summary, self.advice)
        return "\n".join(line for line in lines if line)


def _entry(label: str, title: str, summary: str, advice: str) -> tuple[str, DiseaseEntry]:
    return label, DiseaseEntry(label=label, title=title, summary=summary, advice=advice)


UNKNOWN_CONDITION = DiseaseEntry(
    label="unknown",
    title="Unknown condition",
    summary="Please verify the diagnosis or input value.",
    advice="",
)

DISEASE_TABLE = MappingProxyType(dict([
    _entry("aphid", "Aphid",
           "Small sap-sucking insects causing yellowing and stunted growth.",
           "Monitor for rapid spread."),
    _entry("black rust", "Black Rust",
           "Fungal disease with dark, rust-colored pustules.",
           "Can weaken the plant if untreated."),
    _entry("blast", "Blast",
           "Fungal infection that forms lesions on leaves and spikes.",
           "May lead to reduced yield."),
    _entry("brown rust", "Brown Rust",
           "Rust-colored spots on leaves reduce photosynthesis.",
           "Early detection is important."),
    _entry("common root rot", "Common Root Rot",
           "Fungal disease attacking the roots.",
           "Leads to poor nutrient uptake and stunted growth."),
    _entry("fusarium head blight", "Fusarium Head Blight",
           "Affects wheat heads, causing shriveled kernels.",
           "Risk of mycotoxin contamination."),
    _entry("healthy", "Healthy",
           "The wheat plant shows no disease symptoms.",
           "Keep up regular monitoring."),
    _entry("leaf blight", "Leaf Blight",
           "Causes necrotic lesions on leaves.",
           "Reduces overall plant vigor if severe."),
    _entry("mildew", "Mildew",
           "Fungal infection with a powdery white coating on leaves.",
           "May affect photosynthesis if widespread."),
    _entry("mite", "Mite",
           "Tiny pests feeding on plant sap.",
           "Results in discoloration and potential leaf drop."),
    _entry("septoria", "Septoria",
           "Fungal leaf spot disease with dark lesions.",
           "Can lead to early defoliation."),
    _entry("smut", "Smut",
           "Fungal disease producing dark, powdery spores on grains.",
           "Affects grain quality and yield."),
    _entry("stem fly", "Stem fly",
           "Insect pest that damages stems.",
           "May cause lodging and weakened plant structure."),
    _entry("tan spot", "Tan spot",
           "Causes tan lesions on leaves that may merge.",
           "Significantly reduces photosynthetic area."),
    _entry("yellow rust", "Yellow Rust",
           "Fungal infection with yellowish pustules on leaves.",
           "Reduces overall plant vigor."),
]))
