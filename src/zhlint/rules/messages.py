"""Validation messages."""

PUNCTUATION_FULL_WIDTH = "This punctuation should be full-width."
PUNCTUATION_HALF_WIDTH = "This punctuation should be half-width."

CONTENT_SPACE_HALF_WIDTH = "There should be a single space between half-width content."
CONTENT_NOSPACE_FULL_WIDTH = "There should be no space between full-width content."
CONTENT_SPACE_MIXED_WIDTH = (
    "There should be a single space between half-width and full-width content."
)
CONTENT_NOSPACE_MIXED_WIDTH = (
    "There should be no space between half-width and full-width content."
)

PUNCTUATION_NOSPACE_BEFORE = "There should be no space before this punctuation."
PUNCTUATION_SPACE_AFTER = "There should be a single space after this punctuation."
PUNCTUATION_NOSPACE_AFTER = "There should be no space after this punctuation."

QUOTATION_NOSPACE_INSIDE = "There should be no space inside this quotation."
BRACKET_NOSPACE_INSIDE = "There should be no space inside this bracket."

QUOTATION_SPACE_OUTSIDE = "There should be a single space outside this quotation."
QUOTATION_NOSPACE_OUTSIDE = "There should be no space outside this quotation."
BRACKET_SPACE_OUTSIDE = "There should be a single space outside this bracket."
BRACKET_NOSPACE_OUTSIDE = "There should be no space outside this bracket."

HYPER_MARK_NOSPACE_INSIDE = "There should be no space inside this mark."
