"""Tests for regional rating classification helpers."""

from __future__ import annotations

import pytest

from cinevault.services.safety import (
    classify_content,
    get_movie_certification,
    get_safe_certifications,
    get_tv_certification,
    is_safe_rating,
)
from cinevault.shared.constants import MediaType
from cinevault.shared.models.safety import ContentClass


class TestIsSafeRating:
    """Per-country tables with a permissive default."""

    @pytest.mark.parametrize(
        ("certification", "media_type", "country", "expected"),
        [
            ("PG-13", MediaType.MOVIE, "US", True),
            ("R", MediaType.MOVIE, "US", False),
            ("TV-14", MediaType.TV, "US", True),
            ("TV-MA", MediaType.TV, "US", False),
            (" pg ", MediaType.MOVIE, "us", True),
            ("12A", MediaType.MOVIE, "GB", True),
            ("15", MediaType.MOVIE, "UK", False),
            ("14A", MediaType.MOVIE, "CA", True),
            ("18A", MediaType.MOVIE, "CA", False),
            ("12", MediaType.MOVIE, "DE", True),
            ("16", MediaType.MOVIE, "DE", False),
        ],
    )
    def test_known_countries(self, certification, media_type, country, expected):
        assert is_safe_rating(certification, media_type, country) is expected

    def test_missing_certification_is_permissive(self):
        assert is_safe_rating(None, MediaType.MOVIE) is True
        assert is_safe_rating("", MediaType.TV) is True

    def test_unknown_country_blocks_only_known_restricted(self):
        assert is_safe_rating("R18", MediaType.MOVIE, "FR") is False
        assert is_safe_rating("TV-MA", MediaType.TV, "BR") is False
        assert is_safe_rating("10", MediaType.MOVIE, "FR") is True


class TestSafeCertifications:
    def test_us_movie(self):
        assert get_safe_certifications(MediaType.MOVIE, "US") == ["G", "PG", "PG-13"]

    def test_unknown_country_defaults_to_us(self):
        assert get_safe_certifications(MediaType.TV, "JP") == get_safe_certifications(MediaType.TV)


class TestExtraction:
    """Certifications embedded in detail payloads."""

    def test_movie_certification(self):
        data = {
            "release_dates": {
                "results": [
                    {"iso_3166_1": "DE", "release_dates": [{"certification": "12"}]},
                    {"iso_3166_1": "US", "release_dates": [{"certification": "PG-13"}]},
                ]
            }
        }
        assert get_movie_certification(data) == "PG-13"
        assert get_movie_certification(data, "de") == "12"
        assert get_movie_certification(data, "FR") is None

    def test_movie_certification_missing_data(self):
        assert get_movie_certification({}) is None
        assert get_movie_certification(
            {"release_dates": {"results": [{"iso_3166_1": "US", "release_dates": []}]}}
        ) is None

    def test_tv_certification(self):
        data = {"content_ratings": {"results": [{"iso_3166_1": "US", "rating": "TV-Y7"}]}}
        assert get_tv_certification(data) == "TV-Y7"
        assert get_tv_certification(data, "GB") is None
        assert get_tv_certification({}) is None


class TestClassifyContent:
    def test_adult_flag_is_restricted(self):
        assert classify_content({"adult": True}, MediaType.MOVIE) is ContentClass.RESTRICTED

    def test_no_certification_is_unknown(self):
        assert classify_content({"adult": False}, MediaType.MOVIE) is ContentClass.UNKNOWN

    def test_safe_and_restricted(self):
        safe = {"content_ratings": {"results": [{"iso_3166_1": "US", "rating": "TV-PG"}]}}
        mature = {"content_ratings": {"results": [{"iso_3166_1": "US", "rating": "TV-MA"}]}}

        assert classify_content(safe, MediaType.TV) is ContentClass.SAFE
        assert classify_content(mature, MediaType.TV) is ContentClass.RESTRICTED
