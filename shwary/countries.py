from dataclasses import dataclass
from enum import Enum


class CountryCode(str, Enum):
    DRC = "DRC"
    KENYA = "KE"
    UGANDA = "UG"


@dataclass(frozen=True)
class CountryMetadata:
    """A country supported by Shwary and the limits that apply to its payments."""

    code: CountryCode
    name: str
    currency: str  # ISO 4217
    dial_code: str  # E.164 prefix
    minimum_amount: int


class Country:
    """
    Registry of the countries Shwary can collect payments in.

    Country.DRC, Country.KENYA, Country.UGANDA hold the metadata.
    Country.from_code("KE") looks one up by its code.
    """

    DRC = CountryMetadata(
        code=CountryCode.DRC,
        name="Democratic Republic of Congo",
        currency="CDF",
        dial_code="+243",
        minimum_amount=2900,
    )
    KENYA = CountryMetadata(
        code=CountryCode.KENYA,
        name="Kenya",
        currency="KES",
        dial_code="+254",
        minimum_amount=0,
    )
    UGANDA = CountryMetadata(
        code=CountryCode.UGANDA,
        name="Uganda",
        currency="UGX",
        dial_code="+256",
        minimum_amount=0,
    )

    @classmethod
    def all(cls) -> list[CountryMetadata]:
        return [cls.DRC, cls.KENYA, cls.UGANDA]

    @classmethod
    def from_code(cls, code: str | CountryCode) -> CountryMetadata | None:
        for country in cls.all():
            if country.code == code:
                return country
        return None

    @classmethod
    def is_valid(cls, code: str | CountryCode) -> bool:
        return cls.from_code(code) is not None
