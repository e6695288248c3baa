from __future__ import annotations

from functools import lru_cache

from core.config import get_settings
from core.logging_config import get_logger
from core.services.rules import DEFAULT_CATALOGS, RuleCatalogs, load_catalogs

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_catalogs() -> RuleCatalogs:
    rules_path = get_settings().rules_path
    if not rules_path:
        return DEFAULT_CATALOGS
    catalogs = load_catalogs(rules_path)
    logger.info(
        "rule_catalog_loaded",
        extra={"ctx_path": rules_path, "ctx_long_runs": len(catalogs.long_runs), "ctx_qualities": len(catalogs.qualities)},
    )
    return catalogs
