import pytest

from odontocare.screens.base import Route


@pytest.mark.asyncio
async def test_alerts_load_on_mount_and_focus(odonto, backend, navigator, notifier, logged_in):
    backend.add_alert(42, "Consulta amanhã")
    screen = odonto.alerts_screen(navigator, notifier)
    await screen.mount()
    assert [a.title for a in screen.alerts] == ["Consulta amanhã"]

    backend.add_alert(42, "Hora de escovar")
    await screen.focus()

    assert [a.title for a in screen.alerts] == ["Consulta amanhã", "Hora de escovar"]
    assert screen.unread_count == 2


@pytest.mark.asyncio
async def test_mark_read_flips_only_that_alert(odonto, backend, navigator, notifier, logged_in):
    first = backend.add_alert(42, "Consulta amanhã")
    second = backend.add_alert(42, "Hora de escovar")
    screen = odonto.alerts_screen(navigator, notifier)
    await screen.mount()

    assert await screen.mark_read(first) is True

    read = {alert.id: alert.read for alert in screen.alerts}
    assert read == {first: True, second: False}
    assert backend.alerts[first]["lido"] is True
    assert notifier.messages == []


@pytest.mark.asyncio
async def test_mark_all_read(odonto, backend, navigator, notifier, logged_in):
    backend.add_alert(42, "Consulta amanhã")
    backend.add_alert(42, "Hora de escovar")
    screen = odonto.alerts_screen(navigator, notifier)
    await screen.mount()

    assert await screen.mark_all_read() is True

    assert all(alert.read for alert in screen.alerts)
    assert notifier.messages == [("Sucesso", "Todos os alertas foram marcados como lidos.")]

    await screen.refresh()
    assert all(alert.read for alert in screen.alerts)
    assert screen.refreshing is False


@pytest.mark.asyncio
async def test_read_alert_never_becomes_unread(odonto, backend, navigator, notifier, logged_in):
    alert_id = backend.add_alert(42, "Consulta amanhã")
    screen = odonto.alerts_screen(navigator, notifier)
    await screen.mount()
    await screen.mark_read(alert_id)

    # Server regresses the flag; the screen keeps what it already observed.
    backend.alerts[alert_id]["lido"] = False
    await screen.focus()

    assert screen.alerts[0].read is True


@pytest.mark.asyncio
async def test_failed_mark_read_commits_nothing(odonto, backend, navigator, notifier, logged_in):
    alert_id = backend.add_alert(42, "Consulta amanhã")
    screen = odonto.alerts_screen(navigator, notifier)
    await screen.mount()
    backend.fail_paths.add(f"/api/alertas/{alert_id}/marcar-como-lido")

    assert await screen.mark_read(alert_id) is False

    assert screen.alerts[0].read is False
    assert notifier.messages == [("Erro", "Não foi possível marcar o alerta como lido.")]


@pytest.mark.asyncio
async def test_refresh_failure_keeps_last_alerts(odonto, backend, navigator, notifier, logged_in):
    backend.add_alert(42, "Consulta amanhã")
    screen = odonto.alerts_screen(navigator, notifier)
    await screen.mount()
    backend.fail_paths.add("/api/alertas/paciente/42")

    await screen.refresh()

    assert [a.title for a in screen.alerts] == ["Consulta amanhã"]
    assert notifier.messages == [("Erro", "Não foi possível carregar os alertas.")]


@pytest.mark.asyncio
async def test_alerts_redirect_without_session(odonto, navigator, notifier):
    screen = odonto.alerts_screen(navigator, notifier)
    await screen.mount()

    assert navigator.routes == [Route.LOGIN]
    assert await screen.mark_all_read() is False


@pytest.mark.asyncio
async def test_go_back_pops_navigation(odonto, backend, navigator, notifier, logged_in):
    screen = odonto.alerts_screen(navigator, notifier)
    await screen.mount()
    screen.go_back()

    assert navigator.back == 1


@pytest.mark.asyncio
async def test_malformed_alert_payload_is_reported_not_raised(odonto, backend, navigator, notifier, logged_in):
    backend.add_alert(42, None)
    screen = odonto.alerts_screen(navigator, notifier)

    await screen.mount()

    assert screen.loading is False
    assert screen.alerts == []
    assert notifier.messages == [("Erro", "Não foi possível carregar os alertas.")]
