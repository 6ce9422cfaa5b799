"""Word-list codename adapter — implements CodenamePort."""

from __future__ import annotations

from noob_channel.application.ports.codename_port import CodenamePort

ADVERBS: tuple[str, ...] = (
    "Boldly", "Briskly", "Calmly", "Cheerfully", "Cleverly", "Curiously",
    "Daringly", "Deftly", "Eagerly", "Earnestly", "Evenly", "Fairly",
    "Fiercely", "Fondly", "Freely", "Gently", "Gladly", "Gracefully",
    "Happily", "Honestly", "Humbly", "Jointly", "Keenly", "Kindly",
    "Lightly", "Loyally", "Merrily", "Mildly", "Neatly", "Nimbly",
    "Openly", "Patiently", "Politely", "Proudly", "Quickly", "Quietly",
    "Rapidly", "Readily", "Safely", "Sharply", "Silently", "Simply",
    "Smoothly", "Softly", "Steadily", "Sternly", "Sweetly", "Swiftly",
    "Tenderly", "Thankfully", "Tidily", "Truly", "Vastly", "Vividly",
    "Warmly", "Wildly", "Wisely", "Wittily", "Yearly", "Zealously",
    "Brightly", "Deeply", "Firmly", "Nobly",
)

ADJECTIVES: tuple[str, ...] = (
    "Amber", "Ancient", "Azure", "Brave", "Breezy", "Bright",
    "Calm", "Candid", "Clever", "Cosmic", "Crimson", "Curious",
    "Dapper", "Dazzling", "Eager", "Electric", "Elegant", "Fabled",
    "Fearless", "Festive", "Gentle", "Gilded", "Golden", "Grand",
    "Hardy", "Hidden", "Humble", "Icy", "Jolly", "Jovial",
    "Keen", "Lively", "Lucky", "Lunar", "Mellow", "Mighty",
    "Misty", "Nimble", "Noble", "Opal", "Placid", "Plucky",
    "Quaint", "Radiant", "Rapid", "Rustic", "Serene", "Silver",
    "Sleek", "Solar", "Sturdy", "Sunny", "Swift", "Tidal",
    "Tranquil", "Vast", "Velvet", "Verdant", "Vivid", "Wandering",
    "Witty", "Zany", "Zesty", "Zealous",
)

NOUNS: tuple[str, ...] = (
    "Anchor", "Aurora", "Badger", "Beacon", "Birch", "Bison",
    "Canyon", "Cedar", "Comet", "Coral", "Crane", "Delta",
    "Dolphin", "Ember", "Falcon", "Fern", "Fjord", "Fox",
    "Galaxy", "Glacier", "Harbor", "Hawk", "Heron", "Horizon",
    "Island", "Jaguar", "Juniper", "Kestrel", "Lagoon", "Lantern",
    "Lynx", "Maple", "Meadow", "Meteor", "Nebula", "Oasis",
    "Orchid", "Otter", "Panda", "Pebble", "Pine", "Prairie",
    "Quartz", "Raven", "Reef", "River", "Sable", "Sequoia",
    "Sparrow", "Summit", "Thistle", "Thunder", "Tiger", "Tundra",
    "Valley", "Vortex", "Walrus", "Willow", "Wren", "Yak",
    "Zenith", "Zephyr", "Acorn", "Basalt",
)

WORD_BYTES = 6
SUFFIX_BYTES = 10
SUFFIX_DIGITS = 10
MIN_HASH_LENGTH = WORD_BYTES + SUFFIX_BYTES


class WordlistCodename(CodenamePort):
    """Maps hash bytes to ``<Adverb><Adjective><Noun><digits>``.

    Each word is chosen by a big-endian 16-bit slice of the hash. The
    ten-digit suffix comes from the next 80 bits, which keeps collisions
    out of reach for any realistic number of channels. The same bytes
    always give the same codename.
    """

    def __init__(
        self,
        adverbs: tuple[str, ...] = ADVERBS,
        adjectives: tuple[str, ...] = ADJECTIVES,
        nouns: tuple[str, ...] = NOUNS,
    ):
        if not (adverbs and adjectives and nouns):
            raise ValueError("Word lists cannot be empty")
        self._adverbs = adverbs
        self._adjectives = adjectives
        self._nouns = nouns

    def codename(self, hash_bytes: bytes) -> str:
        if len(hash_bytes) < MIN_HASH_LENGTH:
            raise ValueError(
                f"Need at least {MIN_HASH_LENGTH} hash bytes, got {len(hash_bytes)}"
            )
        slices = [
            int.from_bytes(hash_bytes[i:i + 2], "big") for i in range(0, WORD_BYTES, 2)
        ]
        suffix = int.from_bytes(hash_bytes[WORD_BYTES:MIN_HASH_LENGTH], "big")
        return (
            self._adverbs[slices[0] % len(self._adverbs)]
            + self._adjectives[slices[1] % len(self._adjectives)]
            + self._nouns[slices[2] % len(self._nouns)]
            + f"{suffix % 10 ** SUFFIX_DIGITS:0{SUFFIX_DIGITS}d}"
        )
