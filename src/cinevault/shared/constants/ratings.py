"""Content rating constants for child safety mode.

Movie certifications follow the US MPAA system. TV ratings mix the US TV
Parental Guidelines with the labels other regions report through TMDB.
"""

from __future__ import annotations


class CertificationPolicy:
    """US movie certification policy (fail closed allowlist)."""

    COUNTRY = "US"
    CEILING = "PG-13"

    CHILD_SAFE = frozenset({"G", "PG", "PG-13"})

    # Blocked explicitly; anything outside CHILD_SAFE is blocked as well
    MATURE = frozenset({"R", "NC-17", "NR", "UR", ""})


class TVRatingPolicy:
    """TV content rating policy.

    TV-14 (and the regional 15/16 equivalents) are allowed, matching the
    PG-13 ceiling applied to movies.
    """

    PREFERRED_COUNTRY = "US"

    MATURE = frozenset(
        {
            "TV-MA",
            "R",
            "NC-17",
            "18",
            "18+",
            "M",
            "MA15+",
        }
    )


class RegionalRatings:
    """Safe and restricted certification tables per country."""

    SAFE_US_MOVIE = ("G", "PG", "PG-13")
    RESTRICTED_US_MOVIE = ("R", "NC-17", "NR", "UR")

    SAFE_US_TV = ("TV-Y", "TV-Y7", "TV-Y7-FV", "TV-G", "TV-PG", "TV-14")
    RESTRICTED_US_TV = ("TV-MA",)

    SAFE_UK_MOVIE = ("U", "PG", "12", "12A")
    RESTRICTED_UK_MOVIE = ("15", "18", "R18")

    SAFE_CA_MOVIE = ("G", "PG", "14A")
    RESTRICTED_CA_MOVIE = ("18A", "R", "A")

    SAFE_DE_MOVIE = ("0", "6", "12")
    RESTRICTED_DE_MOVIE = ("16", "18")

    # GB and UK both name the BBFC system
    UK_ALIASES = ("GB", "UK")


__all__ = ["CertificationPolicy", "RegionalRatings", "TVRatingPolicy"]
