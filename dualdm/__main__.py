from __future__ import annotations

import uvicorn
from dotenv import load_dotenv

from dualdm.api.deps import get_settings


def main() -> None:
    load_dotenv(override=False)
    settings = get_settings()
    uvicorn.run("dualdm.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
