from mediaq.model.environment import Environment
from mediaq.model.query import (
    And,
    Comparator,
    Condition,
    FeatureTest,
    FeatureValue,
    MediaFeature,
    MediaQuery,
    MediaQueryList,
    MediaType,
    ValueKind,
    iter_features,
)
from mediaq.model.values import Length, Orientation, Ratio, Resolution

__all__ = [
    "And",
    "Comparator",
    "Condition",
    "Environment",
    "FeatureTest",
    "FeatureValue",
    "Length",
    "MediaFeature",
    "MediaQuery",
    "MediaQueryList",
    "MediaType",
    "Orientation",
    "Ratio",
    "Resolution",
    "ValueKind",
    "iter_features",
]
