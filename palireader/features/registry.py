from enum import Enum, auto
from typing import Callable, List, Optional, Any, Dict, Iterable
import logging

logger = logging.getLogger(__name__)

class FeatureState(Enum):
    STANDARD = auto()
    DISABLED = auto()

class Feature:
    def __init__(self, name: str, handler: Callable[[str], str], state: FeatureState = FeatureState.STANDARD, meta: Dict = None):
        self.name = name
        self.handler = handler
        self.state = state
        self.meta = meta or {}

    def __repr__(self):
        return f"Feature({self.name!r}, {self.state.name})"

class Pipeline:
    """
    A sequence of text transformations executed in order.
    Every document served by the reader passes through one.
    """
    def __init__(self, name: str):
        self.name = name
        self._steps: List[Callable[[str], str]] = []

    def add_step(self, handler: Callable[[str], str]):
        self._steps.append(handler)

    def run(self, content: str) -> str:
        """Execute the pipeline on the content."""
        for step in self._steps:
            try:
                content = step(content)
            except Exception as e:
                # Log and continue with the content as it was before this step
                logger.error(f"Pipeline {self.name} step {getattr(step, '__name__', 'unknown')} failed: {e}", exc_info=True)
        return content

    def __iter__(self):
        return iter(self._steps)

    def __len__(self):
        return len(self._steps)

class FeatureManager:
    """
    Holds the registered document features and builds pipelines from them.
    Features run in registration order.
    """
    def __init__(self):
        self._features: List[Feature] = []

    def register(self, feature: Feature):
        existing_idx = next((i for i, f in enumerate(self._features) if f.name == feature.name), -1)
        if existing_idx >= 0:
            self._features[existing_idx] = feature
            logger.warning(f"FeatureManager: Overwrote existing feature '{feature.name}'")
        else:
            self._features.append(feature)
            logger.debug(f"FeatureManager: Registered feature {feature.name}")

    def get_feature(self, name: str) -> Optional[Feature]:
        return next((f for f in self._features if f.name == name), None)

    @property
    def features(self) -> List[Feature]:
        return list(self._features)

    def build_pipeline(self, disabled: Iterable[str] = ()) -> Pipeline:
        """
        Build the document pipeline.
        Features named in `disabled` are skipped along with any feature in DISABLED state.
        """
        disabled = set(disabled)
        pipeline = Pipeline("DocumentPipeline")

        for f in self._features:
            if f.state == FeatureState.DISABLED or f.name in disabled:
                logger.debug(f"FeatureManager: Skipping disabled feature '{f.name}'")
                continue
            pipeline.add_step(f.handler)

        return pipeline
