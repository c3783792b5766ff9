"""FastAPI dependencies shared across contexts."""

from collections.abc import Callable

from tenxcards.exceptions import FeatureDisabledError
from tenxcards.feature_flags import FeatureName, require_feature


def feature_guard(name: FeatureName) -> Callable[[], None]:
    """
    Build a dependency that rejects requests while a feature flag is off.

    Declare it in the route's ``dependencies=[...]`` so it runs before
    authentication and body validation.

    Raises:
        FeatureDisabledError: If the flag is disabled (HTTP 403)
    """

    def guard() -> None:
        disabled = require_feature(name)
        if disabled is not None:
            raise FeatureDisabledError(disabled.feature, disabled.message)

    guard.__name__ = f"feature_guard_{name.replace('.', '_')}"
    return guard
