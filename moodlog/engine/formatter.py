"""
Recommendation formatter - turns free-form advice text into display sections.

The advice generator makes no promise about the shape of its output: it may be
a clean numbered list, an emoji-prefixed list, plain prose or a mix of these.
The text is processed in ordered passes and every pass tolerates the shape it
does not find:

1. Split an intro off before the first numbered item
2. Pull out a "tip for the day" trailer
3. Pull out a closing "Remember..." / "Check in..." remark
4. Drop emphasis asterisks
5. Split the remaining body into segments (emoji-prefixed or numbered)
6. Break each segment into index, emoji, title and body; prose without
   any list marker stays one body paragraph

Nothing here raises: the worst case is a single unstructured body section.
"""
import re
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Tuple


EMOJI_CHARS = (
    "\U0001F000-\U0001FAFF"  # pictographs, emoticons, transport, flags
    "\u2300-\u23FF"  # misc technical (watch, hourglass)
    "\u2600-\u27BF"  # misc symbols and dingbats
    "\u2B00-\u2BFF"  # arrows and stars
)
EMOJI_JOINERS = "\uFE0F\u200D\u20E3"  # variation selector, zero-width joiner, keycap

EMOJI_CLUSTER = re.compile(f"[{EMOJI_CHARS}][{EMOJI_CHARS}{EMOJI_JOINERS}]*")
EMOJI_LINE = re.compile(f"\n[{EMOJI_CHARS}]")

# List numbers are ASCII digits only
NUMBERED_ITEM = re.compile(r"\n\d+\.", re.ASCII)
LEADING_NUMBER = re.compile(r"(\d+)\.", re.ASCII)
NUMBERED_SEGMENT_BREAK = re.compile(r"\n(?=\d+\.)", re.ASCII)
EMOJI_SEGMENT_BREAK = re.compile(f"\n(?=[{EMOJI_CHARS}]|Remember|Check|\\d+\\.)", re.ASCII)

TIP_OF_THE_DAY = re.compile(
    r"(?:here['’]?s your\s+)?tip for the day:?\s*[\"“]?([^\"”]+)[\"”]?",
    re.IGNORECASE,
)
CLOSING_REMARK = re.compile(r"(?:Remember|Check in).*\Z", re.DOTALL)
CLOSING_REMARK_TRIGGERS = ("Check in with me tomorrow", "Remember, it")


@dataclass
class Section:
    """One display item of a formatted recommendation."""
    index: Optional[str] = None  # leading list number, without the dot
    emoji: Optional[str] = None
    title: str = ""
    body: str = ""

    @property
    def is_icon_row(self) -> bool:
        """Emoji-led items without a number render as icon-plus-text rows."""
        return self.emoji is not None and self.index is None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["icon_row"] = self.is_icon_row
        return data


@dataclass
class FormattedRecommendation:
    intro: str = ""
    sections: List[Section] = field(default_factory=list)
    final_tip: Optional[str] = None
    final_note: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.intro or self.sections or self.final_tip or self.final_note)

    def to_dict(self) -> dict:
        return {
            "intro": self.intro,
            "sections": [section.to_dict() for section in self.sections],
            "final_tip": self.final_tip,
            "final_note": self.final_note,
        }


def split_intro(text: str) -> Tuple[str, str, bool]:
    """
    Split off everything before the first newline-number-dot marker.

    Returns (intro, body, found_numbered_item). Without a marker the intro is
    empty and the whole text is the body.
    """
    match = NUMBERED_ITEM.search(text)
    if match is None:
        return "", text.strip(), False
    return text[:match.start()].strip(), text[match.start():].strip(), True


def extract_final_tip(text: str, body: str) -> Tuple[Optional[str], str]:
    """Capture the "tip for the day" text and cut the trailer out of the body."""
    match = TIP_OF_THE_DAY.search(text)
    if match is None:
        return None, body

    tip = match.group(1).strip() or None
    trailer = TIP_OF_THE_DAY.search(body)
    if trailer is not None:
        body = body[:trailer.start()].strip()
    return tip, body


def extract_final_note(body: str) -> Tuple[Optional[str], str]:
    """Capture a closing "Remember..." / "Check in..." remark to end of text."""
    if not any(trigger in body for trigger in CLOSING_REMARK_TRIGGERS):
        return None, body

    match = CLOSING_REMARK.search(body)
    if match is None:
        return None, body
    return match.group(0).strip(), body[:match.start()].strip()


def strip_emphasis(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return text.replace("*", "")


def split_segments(
    raw: str,
    body: str,
    intro: str,
    found_numbered_item: bool
) -> Tuple[str, List[str]]:
    """
    Split the body into list segments.

    Emoji-prefixed text (no numbered items, an emoji opening some line) uses
    the first line of the raw text as intro and breaks the body before every
    emoji, "Remember", "Check" or number-dot line. Anything else is treated as
    a numbered list.
    """
    if not found_numbered_item and EMOJI_LINE.search(body):
        intro = raw.split("\n", 1)[0].strip()
        return intro, EMOJI_SEGMENT_BREAK.split(body)[1:]

    segments = NUMBERED_SEGMENT_BREAK.split(body)
    if intro and LEADING_NUMBER.match(intro):
        # The text opened directly with an item, so there is no real intro
        return "", [intro] + segments
    return intro, segments


def split_title(content: str, numbered: bool) -> Tuple[str, str]:
    """Pick title and body: colon, then first line, then number, then body only."""
    if ":" in content:
        title, _, body = content.partition(":")
        return title.strip(), body.strip()
    if "\n" in content:
        title, _, body = content.partition("\n")
        return title.strip(), body.strip()
    if numbered:
        return content, ""
    return "", content


def parse_section(segment: str) -> Optional[Section]:
    """Turn one segment into a Section. Blank segments give None."""
    content = segment.strip()
    if not content:
        return None

    index = None
    match = LEADING_NUMBER.match(content)
    if match:
        index = match.group(1)
        content = content[match.end():].strip()

    emoji = None
    match = EMOJI_CLUSTER.match(content)
    if match:
        emoji = match.group(0)
        content = content[match.end():].strip()

    title, body = split_title(strip_emphasis(content), numbered=index is not None)

    return Section(
        index=index,
        emoji=emoji,
        title=strip_emphasis(title),
        body=strip_emphasis(body),
    )


def is_prose(segment: str) -> bool:
    """Text with no list number and no leading emoji is kept whole."""
    content = segment.strip()
    return not (LEADING_NUMBER.match(content) or EMOJI_CLUSTER.match(content))


def format_recommendation(text: Optional[str]) -> FormattedRecommendation:
    """Parse a free-form recommendation into intro, sections, tip and note."""
    if not text or not text.strip():
        return FormattedRecommendation()

    intro, body, found_numbered_item = split_intro(text)
    final_tip, body = extract_final_tip(text, body)
    final_note, body = extract_final_note(body)

    raw = strip_emphasis(text)
    body = strip_emphasis(body)
    intro = strip_emphasis(intro)
    final_tip = strip_emphasis(final_tip)
    final_note = strip_emphasis(final_note)

    emoji_format = not found_numbered_item and EMOJI_LINE.search(body) is not None
    intro, segments = split_segments(raw, body, intro, found_numbered_item)

    if not found_numbered_item and not emoji_format:
        # Plain prose: one paragraph, never split into title and body
        prose = body.strip()
        if prose and is_prose(prose):
            return FormattedRecommendation(
                intro=intro,
                sections=[Section(body=prose)],
                final_tip=final_tip,
                final_note=final_note,
            )

    sections = []
    for segment in segments:
        section = parse_section(segment)
        if section is not None:
            sections.append(section)

    return FormattedRecommendation(
        intro=intro,
        sections=sections,
        final_tip=final_tip,
        final_note=final_note,
    )
