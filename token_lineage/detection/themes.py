"""
Theme Dictionary.

A curated mapping from theme key to associated keywords, used to detect
tokens that share a narrative without sharing substrings ("FROGKING"
and "PEPE" both belong to the frog theme).

The first keyword of every list is the theme's canonical term. Theme
matching only fires when the runner's own text contains that canonical
term, i.e. when the runner is plausibly the main token for the theme.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from types import MappingProxyType

_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")

THEME_ENTITIES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        # Frogs
        "pepe": (
            "pepe", "pep", "frog", "kek", "rare", "smug", "feels", "apu", "peepo",
            "pepega", "ribbit", "toad", "hoppy", "froggy", "kekius", "grok",
            "groyper", "honk", "clown", "honkler",
        ),
        # Dogs
        "doge": (
            "doge", "shiba", "shib", "inu", "kabosu", "cheems", "bonk", "doggy",
            "shibu", "woof", "puppy", "pupper", "doggo", "floki", "akita", "corgi",
            "husky", "dingo", "hachiko", "snoop",
        ),
        # Cats
        "cat": (
            "cat", "kitty", "kitten", "meow", "popcat", "mog", "michi", "nyan",
            "catto", "gato", "pussy", "feline", "tabby", "whiskers", "paws",
            "grumpy", "keyboard", "simon", "garfield", "felix",
        ),
        "penguin": (
            "penguin", "pengu", "pingu", "pudgy", "tux", "linux", "waddle",
            "arctic", "emperor", "adelie", "gentoo", "club", "happy feet",
        ),
        # Monkeys and apes
        "monkey": (
            "monkey", "ape", "chimp", "gorilla", "orangutan", "punch", "bored",
            "bayc", "primate", "banana", "jungle", "kong", "harambe", "baboon",
            "macaque", "gibbon", "simian",
        ),
        "trump": (
            "trump", "donald", "maga", "potus", "47", "melania", "barron",
            "ivanka", "donaldo", "mango", "cheeto", "bigly", "yuge", "covfefe",
            "winning", "drumpf", "emperor", "don", "djt", "45", "republican", "gop",
        ),
        "elon": (
            "elon", "musk", "tesla", "spacex", "x", "mars", "starship", "elun",
            "dojo", "neuralink", "boring", "hyperloop", "cyber", "truck",
            "roadster", "rocket", "technoking", "dogfather",
        ),
        "ai": (
            "ai", "gpt", "agent", "bot", "neural", "openai", "anthropic", "llm",
            "claude", "chatgpt", "gemini", "bard", "copilot", "midjourney",
            "stable", "diffusion", "machine", "learning", "robot", "cyborg",
            "sentient", "agi", "singularity", "skynet", "terminator",
        ),
        "goat": (
            "goat", "goatse", "billy", "ram", "greatest", "capricorn", "ibex",
            "mountain", "horns", "beard", "bleat",
        ),
        "bird": (
            "bird", "tweet", "twitter", "eagle", "hawk", "owl", "parrot", "crow",
            "raven", "phoenix", "duck", "chicken", "rooster", "pigeon", "dove",
            "falcon", "vulture", "condor", "flamingo", "toucan", "pelican",
        ),
        "bear": (
            "bear", "teddy", "panda", "grizzly", "polar", "koala", "bearish",
            "cub", "hibernation", "honey", "kodiak", "black", "brown", "spirit",
        ),
        "bull": (
            "bull", "toro", "ox", "buffalo", "bison", "bullish", "matador",
            "rodeo", "horns", "charge", "stampede", "minotaur", "brahma", "angus",
        ),
        "hippo": (
            "hippo", "moodeng", "moodang", "pygmy", "hippopotamus", "river",
            "horse", "hungry", "chomp", "chonk", "thicc",
        ),
        # Peanut the squirrel
        "pnut": (
            "pnut", "peanut", "squirrel", "nut", "nuts", "acorn", "chipmunk",
            "nutty", "cashew", "almond", "walnut", "hazel",
        ),
        # Dog-wif-hat memes
        "wif": (
            "wif", "hat", "dogwifhat", "catwif", "with", "wearing", "helmet",
            "cap", "beanie", "fedora", "tophat", "sombrero",
        ),
        "wojak": (
            "wojak", "wojack", "soyjak", "feels", "brainlet", "pink", "doomer",
            "bloomer", "zoomer", "boomer", "coomer", "glow", "npc", "chad",
            "virgin", "gigachad", "sigma", "alpha", "beta", "trad", "based",
            "redpill",
        ),
        "moon": (
            "moon", "lunar", "moonboy", "mooning", "tomoon", "apollo", "crater",
            "tide", "wolf", "harvest", "eclipse", "fullmoon", "moonshot",
            "moonwalk",
        ),
        "alien": (
            "alien", "aliens", "ufo", "extraterrestrial", "et", "area51",
            "roswell", "grey", "greys", "grays", "abduction", "spaceship",
            "martian", "xfiles", "contact", "disclosure", "seti", "firstcontact",
            "invasion", "probe", "mothership", "reptilian", "pleiadian", "nordic",
            "annunaki", "nibiru",
        ),
        "anime": (
            "anime", "manga", "waifu", "senpai", "kawaii", "otaku", "weeb",
            "neko", "chan", "kun", "san", "sama", "desu", "baka", "sugoi",
            "naruto", "goku", "hentai", "loli", "chibi",
        ),
        "china": (
            "china", "chinese", "dragon", "panda", "bamboo", "jade", "kung",
            "wushu", "shaolin", "yin", "yang", "dynasty", "emperor", "mandarin",
            "beijing", "shanghai", "xi", "ccp", "yuan", "rmb",
        ),
        "korea": (
            "korea", "korean", "kimchi", "kpop", "seoul", "gangnam", "oppa",
            "noona", "hyung", "aegyo", "hallyu", "bibimbap", "soju", "hanbok",
        ),
        "food": (
            "food", "burger", "pizza", "taco", "sushi", "ramen", "noodle", "rice",
            "bread", "cheese", "bacon", "egg", "chicken", "beef", "pork", "fish",
            "shrimp", "lobster", "crab", "steak", "fries", "hotdog", "sandwich",
            "soup", "salad",
        ),
        "drink": (
            "coffee", "tea", "beer", "wine", "whiskey", "vodka", "rum", "tequila",
            "sake", "champagne", "cocktail", "juice", "soda", "cola", "pepsi",
            "coke", "water", "milk", "boba", "bubble",
        ),
        "drugs": (
            "weed", "cannabis", "marijuana", "420", "blunt", "joint", "dank",
            "kush", "sativa", "indica", "thc", "cbd", "stoner", "high", "baked",
            "lit", "blazed", "shroom", "psychedelic", "acid", "lsd", "dmt",
            "molly", "mdma",
        ),
        "money": (
            "money", "cash", "dollar", "usd", "euro", "pound", "yen", "gold",
            "silver", "diamond", "rich", "wealth", "million", "billion",
            "trillion", "bank", "vault", "treasury", "fed", "reserve", "print",
            "brrrr",
        ),
        "gaming": (
            "game", "gamer", "gaming", "esport", "twitch", "stream", "xbox",
            "playstation", "nintendo", "mario", "zelda", "pokemon", "pikachu",
            "sonic", "minecraft", "fortnite", "roblox", "valorant", "league",
            "dota", "csgo", "cod", "gta", "fifa",
        ),
        # Classic meme vocabulary
        "meme": (
            "meme", "dank", "based", "cringe", "kek", "lol", "lmao", "rofl",
            "bruh", "sus", "amogus", "imposter", "yeet", "poggers", "copium",
            "hopium", "ngmi", "wagmi", "gm", "gn", "ser", "fren", "anon",
        ),
    }
)


def clean_theme_text(text: str) -> str:
    """Lowercase and replace punctuation with spaces (word gaps are kept)."""
    return _NON_WORD_RE.sub(" ", (text or "").lower())


class ThemeDictionary:
    """
    Read-only theme lookup.

    Wraps a theme -> keywords mapping so tests can inject a smaller one.
    """

    def __init__(self, entities: Mapping[str, Sequence[str]] | None = None):
        source = THEME_ENTITIES if entities is None else entities
        self._entities: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {theme: tuple(keywords) for theme, keywords in source.items() if keywords}
        )

    @property
    def themes(self) -> Mapping[str, tuple[str, ...]]:
        return self._entities

    def canonical_keyword(self, theme: str) -> str | None:
        """First keyword of the theme, or None for an unknown theme."""
        keywords = self._entities.get(theme)
        return keywords[0] if keywords else None

    def get_themes(self, text: str) -> list[str]:
        """
        Every theme with at least one keyword occurring in the text.

        Matching is plain substring search on the cleaned text, in
        dictionary order.
        """
        cleaned = clean_theme_text(text)
        if not cleaned.strip():
            return []
        return [
            theme
            for theme, keywords in self._entities.items()
            if any(keyword in cleaned for keyword in keywords)
        ]

    def has_canonical(self, text: str, theme: str) -> bool:
        """True if the text contains the theme's canonical keyword."""
        canonical = self.canonical_keyword(theme)
        return bool(canonical) and canonical in clean_theme_text(text)


DEFAULT_THEMES = ThemeDictionary()


def get_themes(text: str) -> list[str]:
    """Themes of the text according to the built-in dictionary."""
    return DEFAULT_THEMES.get_themes(text)
