"""Static catalogs: lottery stations and prize tiers."""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_STATION = "Chưa rõ đài"

REGION_NORTH = "Miền Bắc"
REGION_CENTRAL = "Miền Trung"
REGION_SOUTH = "Miền Nam"


@dataclass(frozen=True)
class StationAlias:
    name: str
    aliases: tuple[str, ...]


@dataclass(frozen=True)
class PrizeTier:
    key: str
    label: str
    aliases: tuple[str, ...]
    numeral: str | None = None  # None for the special prize


STATION_CATALOG: tuple[StationAlias, ...] = (
    StationAlias("An Giang", ("an giang",)),
    StationAlias("Bạc Liêu", ("bac lieu",)),
    StationAlias("Bến Tre", ("ben tre",)),
    StationAlias("Bình Dương", ("binh duong",)),
    StationAlias("Bình Phước", ("binh phuoc",)),
    StationAlias("Bình Thuận", ("binh thuan",)),
    StationAlias("Cà Mau", ("ca mau",)),
    StationAlias("Cần Thơ", ("can tho",)),
    StationAlias("Đà Lạt", ("da lat",)),
    StationAlias("Đồng Nai", ("dong nai",)),
    StationAlias("Đồng Tháp", ("dong thap",)),
    StationAlias("Hậu Giang", ("hau giang",)),
    StationAlias("Kiên Giang", ("kien giang",)),
    StationAlias("Long An", ("long an",)),
    StationAlias("Sóc Trăng", ("soc trang",)),
    StationAlias("Tây Ninh", ("tay ninh",)),
    StationAlias("Tiền Giang", ("tien giang",)),
    StationAlias("TP HCM", ("tp hcm", "tphcm", "tp ho chi minh", "ho chi minh")),
    StationAlias("Trà Vinh", ("tra vinh",)),
    StationAlias("Vĩnh Long", ("vinh long",)),
    StationAlias("Vũng Tàu", ("vung tau", "ba ria vung tau", "ba ria - vung tau", "brvt")),
)

SPECIAL_TIER_KEY = "gdb"

PRIZE_TIERS: tuple[PrizeTier, ...] = (
    PrizeTier(SPECIAL_TIER_KEY, "ĐB", ("db", "gdb", "giai db", "dac biet", "giai dac biet")),
    PrizeTier("g1", "G1", ("g1", "giai 1", "giai nhat"), "1"),
    PrizeTier("g2", "G2", ("g2", "giai 2", "giai nhi"), "2"),
    PrizeTier("g3", "G3", ("g3", "giai 3", "giai ba"), "3"),
    PrizeTier("g4", "G4", ("g4", "giai 4", "giai bon", "giai tu"), "4"),
    PrizeTier("g5", "G5", ("g5", "giai 5", "giai nam"), "5"),
    PrizeTier("g6", "G6", ("g6", "giai 6", "giai sau"), "6"),
    PrizeTier("g7", "G7", ("g7", "giai 7", "giai bay"), "7"),
    PrizeTier("g8", "G8", ("g8", "giai 8", "giai tam"), "8"),
)

TIER_ORDER: dict[str, int] = {tier.key: i for i, tier in enumerate(PRIZE_TIERS)}
TIER_BY_KEY: dict[str, PrizeTier] = {tier.key: tier for tier in PRIZE_TIERS}
