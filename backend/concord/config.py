"""
Configuration dataclasses for value unification.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Callable, Optional


class UnifyConfigError(ValueError):
    """Invalid unification configuration or a failing preprocessor."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DistanceMetric(str, Enum):
    LEVENSHTEIN = "levenshtein"
    JARO_WINKLER = "jaro_winkler"
    TOKEN_SET_RATIO = "token_set_ratio"


class ClusterLinkage(str, Enum):
    AVERAGE = "average"
    SINGLE = "single"
    COMPLETE = "complete"


class RepresentativeStrategy(str, Enum):
    MEDOID = "medoid"
    SHORTEST = "shortest"
    LONGEST = "longest"
    FIRST_ALPHABETICAL = "first_alphabetical"


DEFAULT_STRIP_CHARS = " .-,()[]{}"
DEFAULT_REMOVE_INTERNAL_CHARS = ".,-()[]{}"

# Option names used by the browser form, mapped to field names
OPTION_ALIASES = {
    "distanceThreshold": "distance_threshold",
    "distanceMetric": "distance_metric",
    "clusterLinkage": "cluster_linkage",
    "representativeStrategy": "representative_strategy",
    "stripChars": "strip_chars",
    "removeInternalChars": "remove_internal_chars",
    "minClusterSizeForRepresentationChange": "min_cluster_size",
    "min_cluster_size_for_representation_change": "min_cluster_size",
}


def coerce_choice(enum_cls: type[Enum], value, option: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = [member.value for member in enum_cls]
        raise UnifyConfigError(
            f"Invalid {option} {value!r}; expected one of {', '.join(valid)}",
            details={"option": option, "value": value, "valid": valid},
        ) from None


@dataclass
class UnifyConfig:
    """Options controlling one unification call."""

    # Maximum linkage distance at which two clusters are still merged
    distance_threshold: float = 0.35

    distance_metric: DistanceMetric = DistanceMetric.TOKEN_SET_RATIO
    cluster_linkage: ClusterLinkage = ClusterLinkage.AVERAGE
    representative_strategy: RepresentativeStrategy = RepresentativeStrategy.MEDOID

    lowercase: bool = True

    # Characters trimmed from both ends of a value
    strip_chars: str = DEFAULT_STRIP_CHARS

    # Characters deleted anywhere in a value
    remove_internal_chars: str = DEFAULT_REMOVE_INTERNAL_CHARS

    # Clusters smaller than this keep every member unchanged
    min_cluster_size: int = 1

    # Applied to each raw value before normalization
    preprocessor: Optional[Callable[[str], str]] = None

    def __post_init__(self):
        self.distance_metric = coerce_choice(
            DistanceMetric, self.distance_metric, "distance_metric"
        )
        self.cluster_linkage = coerce_choice(
            ClusterLinkage, self.cluster_linkage, "cluster_linkage"
        )
        self.representative_strategy = coerce_choice(
            RepresentativeStrategy, self.representative_strategy, "representative_strategy"
        )

        if isinstance(self.distance_threshold, bool) or not isinstance(
            self.distance_threshold, (int, float)
        ):
            raise UnifyConfigError(
                f"distance_threshold must be a number, got {self.distance_threshold!r}",
                details={"option": "distance_threshold"},
            )
        self.distance_threshold = float(self.distance_threshold)

        if isinstance(self.min_cluster_size, bool) or not isinstance(self.min_cluster_size, int):
            raise UnifyConfigError(
                f"min_cluster_size must be an integer, got {self.min_cluster_size!r}",
                details={"option": "min_cluster_size"},
            )

        for option in ("strip_chars", "remove_internal_chars"):
            if not isinstance(getattr(self, option), str):
                raise UnifyConfigError(
                    f"{option} must be a string",
                    details={"option": option},
                )

        if self.preprocessor is not None and not callable(self.preprocessor):
            raise UnifyConfigError(
                "preprocessor must be callable",
                details={"option": "preprocessor"},
            )

    @classmethod
    def from_options(cls, **options) -> "UnifyConfig":
        """Build a config from keyword options (snake_case or form camelCase names)."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for name, value in options.items():
            field_name = OPTION_ALIASES.get(name, name)
            if field_name not in known:
                raise UnifyConfigError(
                    f"Unknown option {name!r}",
                    details={"option": name, "valid": sorted(known)},
                )
            kwargs[field_name] = value
        return cls(**kwargs)

    def with_options(self, **options) -> "UnifyConfig":
        """Copy of this config with some options overridden."""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current.update({OPTION_ALIASES.get(name, name): value for name, value in options.items()})
        return UnifyConfig.from_options(**current)


DEFAULT_CONFIG = UnifyConfig()

STRICT_CONFIG = UnifyConfig(
    distance_threshold=0.2,
    cluster_linkage=ClusterLinkage.COMPLETE,
)

LENIENT_CONFIG = UnifyConfig(
    distance_threshold=0.5,
    cluster_linkage=ClusterLinkage.SINGLE,
)

PRESETS = {
    "strict": STRICT_CONFIG,
    "default": DEFAULT_CONFIG,
    "lenient": LENIENT_CONFIG,
}
