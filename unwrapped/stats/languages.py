from collections.abc import Iterable

from unwrapped.stats.ranking import round_half_up
from unwrapped.stats.ranking import top_ranked
from unwrapped.stats.types import LanguageShare
from unwrapped.stats.types import RepositorySummary

TOP_LANGUAGES = 5
DEFAULT_LANGUAGE_COLOR = "#8b5cf6"

LANGUAGE_COLORS: dict[str, str] = {
    "JavaScript": "#f1e05a",
    "TypeScript": "#2b7489",
    "Python": "#3572A5",
    "Java": "#b07219",
    "C++": "#f34b7d",
    "C": "#555555",
    "C#": "#239120",
    "PHP": "#4F5D95",
    "Ruby": "#701516",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "Swift": "#ffac45",
    "Kotlin": "#F18E33",
    "Dart": "#00B4AB",
    "HTML": "#e34c26",
    "CSS": "#1572B6",
    "Shell": "#89e051",
    "Vue": "#2c3e50",
    "React": "#61dafb",
}


def language_color(name: str) -> str:
    return LANGUAGE_COLORS.get(name, DEFAULT_LANGUAGE_COLOR)


def unknown_language() -> LanguageShare:
    """Placeholder top language for accounts without any typed repository."""

    return LanguageShare(name="Unknown", percentage=0, color=DEFAULT_LANGUAGE_COLOR)


def rank_languages(
    repositories: Iterable[RepositorySummary], limit: int = TOP_LANGUAGES
) -> list[LanguageShare]:
    """Rank primary languages by share of repositories that declare one.

    Repositories without a primary language are left out of the denominator.
    Languages with equal percentages keep the order they were first seen in.
    """

    counts: dict[str, int] = {}
    total = 0
    for repository in repositories:
        name = repository.primary_language_name
        if not name:
            continue
        counts[name] = counts.get(name, 0) + 1
        total += 1

    if total == 0:
        return []

    shares = [
        LanguageShare(
            name=name,
            percentage=int(round_half_up(count / total * 100)),
            color=language_color(name),
        )
        for name, count in counts.items()
    ]
    return top_ranked(shares, key=lambda share: share.percentage, limit=limit)
