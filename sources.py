"""
Configured event sources for Chile.
Each source is tagged with a kind that selects the fetcher used for it.
"""
from models import SourceDescriptor, SourceKind


def _html(name: str, url: str, city: str) -> SourceDescriptor:
    return SourceDescriptor(name=name, kind="html", url=url, city=city)


def _rss(name: str, url: str, city: str) -> SourceDescriptor:
    return SourceDescriptor(name=name, kind="rss", url=url, city=city)


EVENT_SOURCES: list[SourceDescriptor] = [
    # API
    SourceDescriptor(name="Eventbrite (API)", kind="api", city="Santiago"),
    # Eventbrite listing is rendered client-side, expect few cards
    _html("Eventbrite (Web HTML)", "https://www.eventbrite.cl/d/chile/events/", "Nacional"),

    # Aggregators and large cultural sites
    _html("PanoramasGratis.cl", "https://panoramasgratis.cl/", "Nacional"),
    _html("SantiagoCultura.cl", "https://www.santiagocultura.cl/", "Santiago"),
    _html("ValpoCultura.cl", "https://valpocultura.cl/", "Valparaíso"),
    _html("ConcepciónCultural.cl", "https://www.concepcioncultural.cl/", "Concepción"),
    _html("TodoEnConce.cl", "https://www.todoenconce.cl/", "Concepción"),
    _html("Día de los Patrimonios", "https://www.diadelospatrimonios.cl/", "Nacional"),
    _html("Centro Gabriela Mistral (GAM)", "https://gam.cl/cartelera/", "Santiago"),
    _html("Centro Cultural La Moneda", "https://www.cclm.cl/actividades/", "Santiago"),
    _html("Teatro Municipal de Santiago", "https://municipal.cl/cartelera", "Santiago"),
    _html("Corp. Cultural Las Condes", "https://www.culturallascondes.cl/", "Santiago"),
    _html("Cultura Providencia", "https://culturaprovidencia.cl/", "Santiago"),

    # Museums and universities
    _html("Biblioteca Nacional", "https://www.bibliotecanacional.gob.cl/", "Santiago"),
    _html("Biblioteca de Santiago", "https://www.bibliotecasantiago.gob.cl/", "Santiago"),
    _html("Universidad de Chile (Agenda)", "https://uchile.cl/agenda", "Santiago"),
    _html("USACH (Agenda)", "https://www.usach.cl/agenda-usach", "Santiago"),
    _html("Planetario USACH", "https://planetariochile.cl/", "Santiago"),
    _html("Museo Nacional de Historia Natural", "https://www.mnhn.gob.cl/", "Santiago"),
    _html("Museo de la Memoria y DD.HH.", "https://museodelamemoria.cl/", "Santiago"),
    _html("Museo Chileno de Arte Precolombino", "https://museo.precolombino.cl/", "Santiago"),
    _html("Museo Artequin", "https://artequin.cl/", "Santiago"),

    # Specialised
    _html("Cineteca Nacional de Chile", "https://www.cclm.cl/cineteca-nacional-de-chile/", "Santiago"),
    _html("CineChile.cl", "https://cinechile.cl/cartelera/", "Nacional"),
    _html("Retina Latina", "https://www.retinalatina.org/", "Nacional"),
    _html("Testing en Chile", "https://www.testingenchile.cl/", "Santiago"),
    _html("Congreso Futuro", "https://congresofuturo.cl/", "Nacional"),
    _html("Bicineta.cl", "https://www.bicineta.cl/eventos", "Nacional"),
    _html("IBBY Chile", "https://www.ibbychile.cl/", "Santiago"),
    _html("Calavera Lectora", "https://calaveralectora.org/", "Nacional"),
    _html("Bandsintown", "https://www.bandsintown.com/es/c/chile", "Nacional"),

    # RSS feeds
    _rss("Santiago Secreto (RSS)", "https://santiagosecreto.com/feed/", "Santiago"),
    _rss("La Tercera Finde (RSS)", "https://www.latercera.com/finde/feed/", "Nacional"),
    _rss("Chilevisión Panoramas (RSS)", "https://www.chilevision.cl/tag/panoramas-gratis/feed", "Nacional"),
    _rss("Chile es Tuyo (RSS)", "https://chileestuyo.cl/feed/", "Nacional"),
    _rss("El Mostrador Cultura (RSS)", "https://www.elmostrador.cl/cultura/feed/", "Nacional"),
    _rss("Diario Concepción Cultura (RSS)", "https://www.diarioconcepcion.cl/cultura/feed/", "Concepción"),

    # Municipalities with a culture/agenda section
    _html("Municipalidad de Antofagasta", "https://www.municipalidadantofagasta.cl/cultura/", "Antofagasta"),
    _html("Municipalidad de La Serena", "https://www.laserena.cl/agenda/", "La Serena"),
    _html("Municipalidad de Coquimbo", "https://www.municoquimbo.cl/cultura/", "Coquimbo"),
    _html("Municipalidad de Viña del Mar", "https://www.munivina.cl/agenda/", "Viña del Mar"),
    _html("Municipalidad de Puerto Montt", "https://www.puertomontt.cl/cultura/", "Puerto Montt"),
]


def sources_by_kind(kind: SourceKind, sources: list[SourceDescriptor] = EVENT_SOURCES) -> list[SourceDescriptor]:
    """Return the configured sources of one kind, in registry order."""
    return [s for s in sources if s.kind == kind]
