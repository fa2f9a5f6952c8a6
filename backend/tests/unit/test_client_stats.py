"""Unit tests for the client roster statistics."""

from dashboard.domain.entities import ClientRecord, ClientStats


def _client(producto: str, estatus: str, monto: float | None) -> ClientRecord:
    return ClientRecord(
        mes_registro=3, anio_registro=2025,
        producto=producto, estatus=estatus, monto=monto,
    )


def test_dashboard_counters():
    stats = ClientStats.from_clients([
        _client("Crédito de nómina", "Dispersión", 1000),
        _client("Moto X", "Dispersión", 500),
        _client("Moto Y", "Dispersión", 300),
        _client("Crédito de nómina", "Pendiente", 200),
    ])

    assert stats.total_monto_nomina == 1000
    assert stats.motos_vendidas == 2
    assert stats.en_pipeline == 1
    assert stats.total_clientes == 4
    assert len(stats.dispersiones) == 3


def test_missing_monto_counts_as_zero():
    stats = ClientStats.from_clients([
        _client("Crédito de nómina", "Dispersión", None),
        _client("Crédito de nómina", "Dispersión", 250),
    ])
    assert stats.total_monto_nomina == 250


def test_rejected_clients_leave_the_pipeline_without_counting_as_sales():
    stats = ClientStats.from_clients([
        _client("Moto X", "Rechazado", 900),
        _client("Crédito de nómina", "Rechazado", 900),
    ])
    assert stats.en_pipeline == 0
    assert stats.motos_vendidas == 0
    assert stats.total_monto_nomina == 0
    assert stats.dispersiones == []


def test_status_match_is_accent_sensitive():
    stats = ClientStats.from_clients([_client("Moto X", "Dispersion", 100)])
    assert stats.motos_vendidas == 0
    assert stats.en_pipeline == 1


def test_empty_roster():
    stats = ClientStats.from_clients([])
    assert stats.total_clientes == 0
    assert stats.total_monto_nomina == 0
