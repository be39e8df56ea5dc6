"""
Seed Data Script - Creates a demo BI, automation and task series
Run: python -m scripts.seed_data [--workspace demo]

Only meaningful with STORAGE_BACKEND=mongo: the memory store lives and dies
with the process.
"""
import argparse
import sys

from opsboard.config.settings import get_settings
from opsboard.domain.enums import BaseStatus, RecurrenceKind, Recorrencia, StorageBackend
from opsboard.domain.models import AutomationCreate, BaseCreate, BiCreate, TaskCreate
from opsboard.repositories.factory import build_repositories
from opsboard.repositories.mongo_client import create_indexes
from opsboard.services.automation_service import AutomationService
from opsboard.services.bi_service import BiService
from opsboard.services.task_service import TaskService
from opsboard.utils.time import today_ymd


def seed(workspace: str) -> None:
    settings = get_settings()
    if settings.storage_backend.lower() != StorageBackend.MONGO.value:
        print("STORAGE_BACKEND is not 'mongo'; nothing would persist. Skipping seed.")
        return

    create_indexes()
    repos = build_repositories(settings)

    bi_service = BiService(repos.bis)
    if bi_service.list_bis():
        print("Database already has data. Skipping seed.")
        return

    bi = bi_service.create_bi(BiCreate(
        nome="Painel de Chamados",
        data_inicio=today_ymd(),
        data_final=today_ymd(),
        responsavel="Ana",
        operacao="Service Desk",
        bases=[
            BaseCreate(nome_ferramenta="GLPI", pasta_origem="/dados/glpi", tem_api=True),
            BaseCreate(nome_ferramenta="Planilha SLA", pasta_origem="/dados/sla"),
        ],
    ))
    bi = bi_service.update_base_status(bi.bases[0].id, BaseStatus.CONCLUIDO, bi_id=bi.id)
    print(f"Created BI {bi.id} with {len(bi.bases)} bases")

    automation = AutomationService(repos.automations).create_automation(AutomationCreate(
        nome_integracao="Extração GLPI",
        recorrencia=Recorrencia.DIARIO,
        data_hora=f"{today_ymd()}T06:00",
        nome_executavel="extrator_glpi.exe",
        pasta_fim_atualizacao="/dados/glpi/saida",
    ))
    print(f"Created automation {automation.id}")

    tasks = TaskService(repos.tasks).create_task(TaskCreate(
        titulo="Conferir carga diária",
        inicio="08:00",
        fim="08:30",
        responsavel="Ana",
        operacao="Service Desk",
        ymd=today_ymd(),
        rec_kind=RecurrenceKind.DAILY,
        workspace_id=workspace,
    ))
    print(f"Created {len(tasks)} task occurrences in workspace '{workspace}'")


def main():
    parser = argparse.ArgumentParser(description="Seed demo data into the configured store")
    parser.add_argument("--workspace", default="demo", help="Task board workspace (default: demo)")
    args = parser.parse_args()
    seed(args.workspace)
    return 0


if __name__ == "__main__":
    sys.exit(main())
