"""
The fixed set of edits the tool can perform.
"""

from enum import Enum


class Operation(Enum):
    """An edit selected once per invocation; value is the CLI subcommand."""
    ADD_BORDER = "add-border"
    FILL_TO_ASPECT_RATIO = "fill-to-aspect-ratio"
    FILL_TO_ASPECT_RATIO_WITH_BORDER = "fill-to-aspect-ratio-with-border"
    ADD_CAPTION = "add-caption"
    FILL_TO_ASPECT_RATIO_WITH_BORDER_AND_CAPTION = "fill-to-aspect-ratio-with-border-and-caption"

    @property
    def needs_fill(self) -> bool:
        return self in (Operation.FILL_TO_ASPECT_RATIO,
                        Operation.FILL_TO_ASPECT_RATIO_WITH_BORDER,
                        Operation.FILL_TO_ASPECT_RATIO_WITH_BORDER_AND_CAPTION)

    @property
    def needs_border(self) -> bool:
        return self in (Operation.ADD_BORDER,
                        Operation.FILL_TO_ASPECT_RATIO_WITH_BORDER,
                        Operation.FILL_TO_ASPECT_RATIO_WITH_BORDER_AND_CAPTION)

    @property
    def needs_caption(self) -> bool:
        return self in (Operation.ADD_CAPTION,
                        Operation.FILL_TO_ASPECT_RATIO_WITH_BORDER_AND_CAPTION)
