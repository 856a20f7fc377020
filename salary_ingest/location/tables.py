"""Country and city name tables.

English names are canonical. Table order is the tie-break order for
suggestions with equal scores.
"""

from types import MappingProxyType
from typing import Optional, Sequence, Tuple

from .models import LocationEntry

BELGIUM = "Belgium"
NETHERLANDS = "Netherlands"
GERMANY = "Germany"
FRANCE = "France"


def _entry(
    en: str,
    nl: Optional[str] = None,
    fr: Optional[str] = None,
    de: Optional[str] = None,
    aliases: Sequence[str] = (),
    country: Optional[str] = None,
) -> LocationEntry:
    names = {"en": en, "nl": nl or en, "fr": fr or en, "de": de or en}
    return LocationEntry(
        canonical_name=en,
        localized_names=MappingProxyType(names),
        aliases=tuple(aliases),
        country=country,
    )


def _be(en, nl=None, fr=None, de=None, aliases=()):
    return _entry(en, nl, fr, de, aliases, country=BELGIUM)


def _nl(en, nl=None, fr=None, de=None, aliases=()):
    return _entry(en, nl, fr, de, aliases, country=NETHERLANDS)


def _de(en, nl=None, fr=None, de=None, aliases=()):
    return _entry(en, nl, fr, de, aliases, country=GERMANY)


def _fr(en, nl=None, fr=None, de=None, aliases=()):
    return _entry(en, nl, fr, de, aliases, country=FRANCE)


COUNTRIES: Tuple[LocationEntry, ...] = (
    _entry(BELGIUM, "België", "Belgique", "Belgien", aliases=("BE", "Belgie")),
    _entry(NETHERLANDS, "Nederland", "Pays-Bas", "Niederlande", aliases=("NL", "Holland", "The Netherlands")),
    _entry(GERMANY, "Duitsland", "Allemagne", "Deutschland", aliases=("DE",)),
    _entry(FRANCE, "Frankrijk", "France", "Frankreich", aliases=("FR",)),
)

CITIES: Tuple[LocationEntry, ...] = (
    # Belgium
    _be("Aalst", fr="Alost"),
    _be("Antwerp", "Antwerpen", "Anvers", "Antwerpen"),
    _be("Arlon", "Aarlen", "Arlon", "Arel"),
    _be("Bruges", "Brugge", "Bruges", "Brügge", aliases=("Brugs",)),
    _be("Brussels", "Brussel", "Bruxelles", "Brüssel", aliases=("BXL", "Brussels Capital Region")),
    _be("Charleroi"),
    _be("Ghent", "Gent", "Gand", "Gent"),
    _be("Hasselt"),
    _be("Kortrijk", fr="Courtrai"),
    _be("Leuven", "Leuven", "Louvain", "Löwen"),
    _be("Liège", "Luik", "Liège", "Lüttich", aliases=("Liege",)),
    _be("Mechelen", "Mechelen", "Malines", "Mecheln"),
    _be("Mons", "Bergen", "Mons", "Mons"),
    _be("Namur", "Namen", "Namur", "Namür"),
    _be("Ostend", "Oostende", "Ostende", "Ostende"),
    _be("Tournai", "Doornik", "Tournai", "Tournai"),
    _be("Ypres", "Ieper", "Ypres", "Ypern"),
    _be("Genk"),
    _be("La Louvière"),
    _be("Sint-Niklaas", fr="Saint-Nicolas"),
    _be("Roeselare", fr="Roulers"),
    _be("Wavre", nl="Waver"),
    _be("Dendermonde", fr="Termonde"),
    _be("Turnhout"),
    _be("Mouscron", nl="Moeskroen"),
    _be("Seraing"),
    _be("Verviers"),
    # Netherlands
    _nl("Amsterdam"),
    _nl("Rotterdam"),
    _nl("The Hague", "Den Haag", "La Haye", "Den Haag", aliases=("'s-Gravenhage",)),
    _nl("Utrecht"),
    _nl("Eindhoven"),
    _nl("Tilburg"),
    _nl("Groningen", fr="Groningue"),
    _nl("Almere"),
    _nl("Breda"),
    _nl("Nijmegen", fr="Nimègue", de="Nimwegen"),
    _nl("Enschede"),
    _nl("Haarlem"),
    _nl("Arnhem"),
    _nl("Zaanstad"),
    _nl("Amersfoort"),
    _nl("Maastricht"),
    # Germany
    _de("Aachen", "Aken", "Aix-la-Chapelle", "Aachen"),
    _de("Cologne", "Keulen", "Cologne", "Köln"),
    _de("Düsseldorf"),
    # France
    _fr("Lille", "Rijsel", "Lille", "Lille"),
    _fr("Paris", "Parijs", "Paris", "Paris"),
)
