"""
Naming — File names to Go identifiers

Terraform providers follow a fixed convention: the file
resource_aws_instance.go declares func resourceAwsInstance().
"""

import os


def underscore_to_camel(s: str) -> str:
    """
    Convert resource_provider_name to resourceProviderName.

    The first segment is kept as-is; every later segment has its first
    character upper-cased. Empty segments (doubled underscores) vanish.
    """
    words = s.split("_")
    result = words[0]
    for word in words[1:]:
        if word:
            result += word[0].upper() + word[1:]
    return result


def strip_file_extension(name: str) -> str:
    """Remove the final file extension: resource_x.go -> resource_x."""
    root, _ = os.path.splitext(name)
    return root


def function_name_for(path) -> str:
    """Return the function name to look for in the unit at path."""
    return underscore_to_camel(strip_file_extension(os.path.basename(str(path))))


def strip_prefix(name: str, prefix: str) -> str:
    """Return name with a leading prefix removed."""
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name
