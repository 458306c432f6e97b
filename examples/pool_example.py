from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor

from physcores import LOGGER_NAME, physical_core_count


def square(n: int) -> int:
    return n * n


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG)

    # detection spawns a process on most platforms; do it once
    workers = physical_core_count() or os.cpu_count() or 1
    print(f"physical cores: {workers} (logical: {os.cpu_count()})")
    with ProcessPoolExecutor(max_workers=workers) as pool:
        print(list(pool.map(square, range(10))))
