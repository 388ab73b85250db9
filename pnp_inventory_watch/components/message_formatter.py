"""
Notification text for newly listed vehicles.
"""

from typing import List

from ..models.inventory import InventoryItem

# Telegram rejects sendMessage text longer than this many UTF-16 code units.
TELEGRAM_MESSAGE_LIMIT = 4096


def telegram_length(text: str) -> int:
    """Length of ``text`` as Telegram counts it, in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


class MessageFormatter:
    """Renders one message summarizing a batch of new inventory items."""

    def __init__(self, label: str = "vehicles", max_length: int = TELEGRAM_MESSAGE_LIMIT):
        """
        Initialize the formatter.

        Args:
            label: What the watched search lists, e.g. "Hyundai Accents"
            max_length: Longest message the messaging platform accepts
        """
        self.label = label
        self.max_length = max_length

    def format_new_items(self, new_items: List[InventoryItem]) -> str:
        """
        Format new items as a summary line followed by one line per item.

        Items that do not fit within ``max_length`` are replaced by a
        trailing "…and K more" line; the summary keeps the full count.
        """
        header = f"🤩 Found {len(new_items)} new {self.label}:"
        lines = [header]
        length = telegram_length(header)

        for index, item in enumerate(new_items):
            line = self.format_item(item)
            remaining = len(new_items) - index
            overflow = f"…and {remaining} more"
            # Leave room for the overflow line unless this is the last item.
            reserve = 0 if remaining == 1 else telegram_length(overflow) + 1
            if length + 1 + telegram_length(line) + reserve > self.max_length:
                lines.append(overflow)
                break
            lines.append(line)
            length += 1 + telegram_length(line)

        return "\n".join(lines)

    @staticmethod
    def format_item(item: InventoryItem) -> str:
        """Format a single inventory item."""
        return (
            f"🚙 Date Added: {item.date_added}, Year: {item.year}, "
            f"Colour: {item.color}, Location: {item.location}"
        )
