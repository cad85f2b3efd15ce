import io
import re
from typing import Any

import yaml

_FM = re.compile(r"^\s*---\s*\n(.*?)\n---\s*\n?", re.DOTALL)


class YamlFrontmatter:
    """Split a leading YAML frontmatter block off a Markdown file."""

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = _FM.match(text)
        if not m:
            return {}, text
        try:
            meta = yaml.safe_load(io.StringIO(m.group(1)))
        except yaml.YAMLError:
            # "---" rules around ordinary prose, not frontmatter
            return {}, text
        if not isinstance(meta, dict):
            return {}, text
        return meta, text[m.end() :]
