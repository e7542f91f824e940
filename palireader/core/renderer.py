from typing import Any, Dict, Optional
from functools import partial
import logging

from palireader.core.transformer import (
    extract_body,
    make_words_clickable,
    DEFAULT_DICTIONARY_URL,
    DEFAULT_DICTIONARY_TAB,
)
from palireader.features.registry import Feature, FeatureManager, FeatureState

logger = logging.getLogger(__name__)

BODY_FEATURE = "STD_BODY"
WORD_LINKS_FEATURE = "STD_WORD_LINKS"


def build_feature_manager(dictionary_url: str = DEFAULT_DICTIONARY_URL,
                          dictionary_tab: str = DEFAULT_DICTIONARY_TAB) -> FeatureManager:
    """Register the standard document features against a dictionary endpoint."""
    link_words = partial(make_words_clickable, base_url=dictionary_url, tab=dictionary_tab)
    link_words.__name__ = "make_words_clickable"

    manager = FeatureManager()
    manager.register(Feature(BODY_FEATURE, extract_body, FeatureState.STANDARD))
    manager.register(Feature(WORD_LINKS_FEATURE, link_words, FeatureState.STANDARD,
                             meta={'dictionary_url': dictionary_url, 'tab': dictionary_tab}))
    return manager


def render_document(raw: str, config: Optional[Dict[str, Any]] = None) -> str:
    """
    Turn raw .htm text into the HTML fragment shown in the reader.
    `config` uses the Flask app.config keys (DICTIONARY_URL, DICTIONARY_TAB, DISABLED_FEATURES).
    """
    config = config or {}
    manager = build_feature_manager(
        config.get('DICTIONARY_URL', DEFAULT_DICTIONARY_URL),
        config.get('DICTIONARY_TAB', DEFAULT_DICTIONARY_TAB),
    )
    pipeline = manager.build_pipeline(disabled=config.get('DISABLED_FEATURES', ()))

    logger.debug(f"Render document: {len(raw)} chars input, {len(pipeline)} steps")
    return pipeline.run(raw)
