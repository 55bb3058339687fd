"""Pipeline, translation and price conversion services."""

from .catalog_pipeline import (
    CatalogPipeline,
    PipelineOptions,
    PipelineResult,
    apply_title_fix,
    apply_translation,
)
from .price_conversion_service import PriceConversionService
from .translation_service import (
    BaseTranslator,
    OpenAITranslator,
    TranslationResult,
    create_translator,
)

__all__ = [
    "CatalogPipeline",
    "PipelineOptions",
    "PipelineResult",
    "apply_title_fix",
    "apply_translation",
    "PriceConversionService",
    "BaseTranslator",
    "OpenAITranslator",
    "TranslationResult",
    "create_translator",
]
