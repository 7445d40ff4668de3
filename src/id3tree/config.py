"""Runtime settings for tree induction and rendering."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

type MissingBranchPolicy = Literal["no_data_leaf", "omit"]


class InductionSettings(BaseSettings):
    """Settings shared by induction, prediction, and rendering.

    Values are read from `ID3_`-prefixed environment variables or a `.env`
    file, e.g. `ID3_MISSING_BRANCHES=omit`.

    Attributes:
        no_data_label (str): Sentinel label held by leaves built from an
            empty row subset.
        missing_branches (MissingBranchPolicy): What to do with a value of the
            split attribute's universe that has no rows in the current subset.
            `"no_data_leaf"` attaches an explicit no-data leaf; `"omit"`
            leaves the branch out of the node's children.
        indent_width (int): Spaces added per tree level when rendering.
    """

    model_config = SettingsConfigDict(
        env_prefix="ID3_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    no_data_label: str = Field(
        default="no data",
        min_length=1,
        description="Label of leaves built from an empty row subset.",
    )
    missing_branches: MissingBranchPolicy = Field(
        default="no_data_leaf",
        description="Whether unsupported universe values get an explicit no-data leaf or no branch at all.",
    )
    indent_width: int = Field(
        default=2,
        ge=1,
        description="Spaces added per tree level when rendering.",
    )
