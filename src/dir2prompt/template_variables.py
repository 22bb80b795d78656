"""Descriptions of the variables available to prompt templates.

The system variable table is constant for the whole process; it is built once at import time
and exposed read-only.

Nothing in the selection engine or the command line depends on this module. It is a
standalone table for whatever renders the prompt template from the selected files.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

SYSTEM_VARIABLES: Mapping[str, str] = MappingProxyType(
    {
        # Top-level template data
        "absolute_code_path": "Path to the codebase directory",
        "source_tree": "Directory tree structure",
        "files": "Array of file objects with content",
        "git_diff": "Git diff output (if enabled)",
        "git_diff_branch": "Git diff between branches",
        "git_log_branch": "Git log between branches",
        # File object properties, available inside {{#each files}}
        "path": "File path (available in {{#each files}} context)",
        "code": "File content (available in {{#each files}} context)",
        "extension": "File extension (available in {{#each files}} context)",
        "token_count": "Token count for file (available in {{#each files}} context)",
        "metadata": "File metadata (available in {{#each files}} context)",
        "mod_time": "File modification time (available in {{#each files}} context)",
    }
)


class VariableCategory(str, Enum):
    """Where a template variable's value comes from.

    Attributes:
        SYSTEM: Provided by the tool when building template data
        USER: Defined by the user
        MISSING: Used by the template but defined nowhere
    """

    SYSTEM = "system"
    USER = "user"
    MISSING = "missing"


@dataclass(frozen=True)
class VariableInfo:
    name: str
    value: Optional[str]
    category: VariableCategory
    description: Optional[str] = None


def find_missing_variables(template_variables: Sequence[str], user_variables: Mapping[str, str]) -> List[str]:
    """Return the sorted, de-duplicated names used by a template but defined nowhere.

    Example:
        >>> find_missing_variables(["files", "ticket", "author", "ticket"], {"author": "me"})
        ['ticket']
    """
    return sorted({var for var in template_variables if var not in SYSTEM_VARIABLES and var not in user_variables})


def organize_variables(template_variables: Sequence[str], user_variables: Mapping[str, str]) -> List[VariableInfo]:
    """Describe the variables a template uses, grouped as system, then user, then missing.

    Example:
        >>> infos = organize_variables(["ticket", "files", "author"], {"author": "me"})
        >>> [(info.name, info.category.value) for info in infos]
        [('files', 'system'), ('author', 'user'), ('ticket', 'missing')]
    """
    variables: List[VariableInfo] = []

    for var in template_variables:
        if var in SYSTEM_VARIABLES:
            variables.append(VariableInfo(var, "(system)", VariableCategory.SYSTEM, SYSTEM_VARIABLES[var]))

    for var in template_variables:
        if var in user_variables and var not in SYSTEM_VARIABLES:
            variables.append(VariableInfo(var, user_variables[var], VariableCategory.USER))

    for var in find_missing_variables(template_variables, user_variables):
        variables.append(VariableInfo(var, None, VariableCategory.MISSING, "Not defined"))

    return variables
