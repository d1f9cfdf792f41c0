# prints every country's life expectancy, then the Common aggregate

from __future__ import annotations
import logging
import sys
from .errors import LifeExpectancyError
from .models import COMMON_KEY
from .service import get_data


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    try:
        table = get_data()
    except LifeExpectancyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    countries = sorted((name for name in table if name != COMMON_KEY), key=str.lower)
    if COMMON_KEY in table:
        countries.append(COMMON_KEY)
    for name in countries:
        s = table[name]
        print(f"{name}: all {s.all:.2f}, male {s.male:.2f}, female {s.female:.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
