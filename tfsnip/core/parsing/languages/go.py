"""
Go language configuration.

Terraform providers are written in Go; tree-sitter-language-pack ships the
grammar under the name "go".
"""

from ..config import LanguageConfig


GO_CONFIG = LanguageConfig(
    name="Go",
    tree_sitter_name="go",
    max_file_size=1_000_000,  # 1MB, generated providers can be large
)
