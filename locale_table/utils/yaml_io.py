# locale_table/utils/yaml_io.py
# YAML rendering for table exports.

from __future__ import annotations

from typing import Any

import yaml


def to_yaml(data: Any) -> str:
    """
    Serialize an export envelope to YAML using the safe dumper.

    - Non-ASCII translations are written as-is, not escaped.
    - Long values are not folded across lines.
    - Key order is kept: table keys are already sorted and languages follow
      the column order.
    """
    return yaml.safe_dump(
        data,
        allow_unicode=True,
        default_flow_style=False,
        sort_keys=False,
        width=10_000,
    )
