"""Tests for the automation registry and canvas services"""
import pytest

from opsboard.domain.enums import Recorrencia
from opsboard.domain.errors import AutomationNotFoundError, ValidationError
from opsboard.domain.models import AutomationCreate, AutomationUpdate, CanvasEdge, CanvasNode
from opsboard.services.automation_service import AutomationService
from opsboard.services.canvas_service import CanvasService


def automation_input(**fields):
    data = {
        "nome_integracao": "Extração GLPI",
        "recorrencia": Recorrencia.DIARIO,
        "data_hora": "2024-01-01T06:00",
        "nome_executavel": "extrator.exe",
        "pasta_fim_atualizacao": "/saida",
    }
    data.update(fields)
    return AutomationCreate(**data)


class TestAutomationService:

    @pytest.fixture
    def service(self, repositories):
        return AutomationService(repositories.automations)

    def test_create_applies_defaults(self, service):
        automation = service.create_automation(automation_input())
        assert automation.id.startswith("AUT-")
        assert automation.repetir_uma_hora is False
        assert service.get_automation(automation.id).recorrencia == Recorrencia.DIARIO

    def test_update_patch(self, service):
        automation = service.create_automation(automation_input())
        updated = service.update_automation(
            automation.id, AutomationUpdate(recorrencia=Recorrencia.SEMANAL, repetir_uma_hora=True)
        )
        assert updated.recorrencia == Recorrencia.SEMANAL
        assert updated.repetir_uma_hora is True
        assert updated.nome_executavel == "extrator.exe"

    def test_delete_and_missing(self, service):
        automation = service.create_automation(automation_input())
        service.delete_automation(automation.id)
        assert service.list_automations() == []
        with pytest.raises(AutomationNotFoundError):
            service.delete_automation(automation.id)
        with pytest.raises(AutomationNotFoundError):
            service.update_automation(automation.id, AutomationUpdate(nome_integracao="x"))


class TestCanvasService:

    @pytest.fixture
    def service(self, repositories):
        return CanvasService(repositories.canvas)

    def test_empty_canvas(self, service):
        canvas = service.get_canvas()
        assert canvas.nodes == [] and canvas.edges == []

    def test_save_replaces_everything(self, service):
        service.save_canvas(
            [CanvasNode(id="n1", position_x=0, position_y=0), CanvasNode(id="n2", position_x=1, position_y=1)],
            [CanvasEdge(id="e1", source="n1", target="n2")],
        )
        service.save_canvas([CanvasNode(id="n3", position_x=5, position_y=5, data={"label": "BI"})], [])

        canvas = service.get_canvas()
        assert [n.id for n in canvas.nodes] == ["n3"]
        assert canvas.nodes[0].data == {"label": "BI"}
        assert canvas.edges == []

    def test_defaults(self, service):
        service.save_canvas(
            [CanvasNode(id="n1", position_x=0, position_y=0)],
            [CanvasEdge(id="e1", source="n1", target="n1")],
        )
        canvas = service.get_canvas()
        assert canvas.nodes[0].type == "default"
        assert canvas.nodes[0].width is None
        assert canvas.edges[0].type == "smoothstep"
        assert canvas.edges[0].animated is False

    def test_duplicate_ids_rejected_without_touching_saved_canvas(self, service):
        service.save_canvas([CanvasNode(id="n1", position_x=0, position_y=0)], [])

        with pytest.raises(ValidationError) as exc_info:
            service.save_canvas(
                [CanvasNode(id="n2", position_x=0, position_y=0), CanvasNode(id="n2", position_x=9, position_y=9)],
                [CanvasEdge(id="e1", source="n2", target="n2"), CanvasEdge(id="e1", source="n2", target="n2")],
            )
        assert exc_info.value.details == {"nodes": ["n2"], "edges": ["e1"]}
        assert [n.id for n in service.get_canvas().nodes] == ["n1"]
