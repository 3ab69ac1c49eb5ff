"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "세계 시계",
        "en": "World Clock",
    },
    "section_clocks": {
        "ko": "내 시계",
        "en": "My Clocks",
    },
    "section_map": {
        "ko": "낮과 밤 지도",
        "en": "Day & Night Map",
    },
    "label_search": {
        "ko": "도시 검색",
        "en": "Search cities",
    },
    "label_lat": {
        "ko": "위도",
        "en": "Latitude",
    },
    "label_lng": {
        "ko": "경도",
        "en": "Longitude",
    },
    "label_24h": {
        "ko": "24시간 표시",
        "en": "24-hour format",
    },
    "btn_add": {
        "ko": "추가",
        "en": "Add",
    },
    "btn_locate": {
        "ko": "가장 가까운 시간대 추가",
        "en": "Add nearest timezone",
    },
    "btn_remove": {
        "ko": "삭제",
        "en": "Remove",
    },
    "btn_favorite": {
        "ko": "즐겨찾기",
        "en": "Favorite",
    },
    "local_time": {
        "ko": "현재 위치",
        "en": "Local time",
    },
    "no_results": {
        "ko": "검색 결과가 없어요.",
        "en": "No matching cities.",
    },
    "error_timezone": {
        "ko": "이 위치의 시간대를 찾을 수 없어요. ({error})",
        "en": "No timezone found for this location. ({error})",
    },
    "map_note": {
        "ko": "시간대 위치는 대략적이에요. 지도는 참고용입니다.",
        "en": "Timezone locations are approximate. Map is for illustration purposes only.",
    },
    "same_time": {
        "ko": "같은 시각",
        "en": "Same time",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
