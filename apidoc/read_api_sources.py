"""Logic for collecting the grammar files of an API directory."""

import logging
from pathlib import Path
from typing import Any

from apidoc.errors import ApiSourceError
from apidoc.load_config import load_config

logger = logging.getLogger(__name__)


def read_api_sources(
    api_dir: Path,
    params_path: Path | None = None,
    config: dict[str, Any] | None = None,
) -> tuple[str, str | None]:
    """Read the grammar files of a directory as one body text plus params text.

    Files are concatenated in sorted name order. The configured params file is
    used as the params source unless an explicit `params_path` is given.
    """
    sources = (config or load_config())["sources"]
    suffix = sources["suffix"]
    exclude = set(sources["exclude"])

    body_parts = []
    for path in sorted(p for p in api_dir.iterdir() if p.is_file()):
        if not path.name.endswith(suffix):
            continue
        if path.name in exclude:
            logger.debug("Skipping excluded source %s", path)
            continue
        if path.name == sources["params_file"]:
            if params_path is None:
                params_path = path
            continue
        logger.debug("Reading %s", path)
        body_parts.append(path.read_text(encoding="utf-8"))

    if not body_parts:
        raise ApiSourceError(f"No {suffix} files found under", str(api_dir))

    params = None
    if params_path is not None:
        logger.debug("Reading params from %s", params_path)
        params = Path(params_path).read_text(encoding="utf-8")
    return "\n".join(body_parts), params
