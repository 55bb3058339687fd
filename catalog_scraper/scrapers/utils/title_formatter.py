"""Title rewriting for Brit dry-food listings.

The shop lists Brit food as a flat token run, e.g.
``Brit Premium By Nature Adult Large 15kg``. Storefront titles put the
series in quotes and the weight in brackets:
``Brit 'Premium By Nature' - Adult Large (15kg)``.
"""

import structlog

logger = structlog.get_logger(__name__)

MIN_TOKENS = 4


class TitleFormatter:
    """Best-effort title restructuring guarded by a brand prefix."""

    @staticmethod
    def format(title: str, brand_guard: str) -> str:
        """Rewrite ``title`` when it starts with ``brand_guard``.

        Args:
            title: Title as scraped
            brand_guard: Brand prefix, compared case-insensitively

        Returns:
            ``"{brand} '{series}' - {age} {size} ({weight})"``, or ``title``
            unchanged when the guard does not match, there are fewer than
            four tokens, or anything goes wrong
        """
        if not title or not title.lower().startswith(brand_guard.lower()):
            return title

        tokens = title.split()
        if len(tokens) < MIN_TOKENS:
            return title

        try:
            brand = tokens[0]
            weight = tokens[-1]
            size = tokens[-2]
            age_type = tokens[-3]
            # Four tokens leave an empty series: "Brit '' - Adult Large (3kg)"
            series_name = " ".join(tokens[1:-3])
            return f"{brand} '{series_name}' - {age_type} {size} ({weight})"
        except Exception as e:
            logger.warning("title_format_failed", title=title, error=str(e))
            return title
