"""BI Service - BI intake tracking and base completion"""
import threading
from typing import List, Optional

from ..domain.models import Bi, BiBase, BiCreate, BiUpdate
from ..domain.enums import BaseStatus, BiStatus
from ..domain.errors import BaseNotFoundError, BiNotFoundError
from ..repositories.bi_repo import BiRepository
from ..utils.idgen import generate_base_id, generate_bi_id
from ..utils.time import utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)


def all_bases_concluded(bases: List[BiBase]) -> bool:
    """True when there is at least one base and every base is concluded"""
    return bool(bases) and all(base.status == BaseStatus.CONCLUIDO for base in bases)


class BiService:
    """Service for BI and base operations"""

    def __init__(self, repo: BiRepository):
        self.repo = repo
        # Base status updates read, modify and write the whole BI
        self._lock = threading.Lock()

    def list_bis(self) -> List[Bi]:
        """All BIs with their bases, newest first"""
        return self.repo.list_all()

    def get_bi(self, bi_id: str) -> Bi:
        return self.repo.get_or_raise(bi_id)

    def create_bi(self, data: BiCreate) -> Bi:
        """Create a BI together with its bases"""
        bi_id = generate_bi_id()
        bases = [
            BiBase(
                id=generate_base_id(),
                bi_id=bi_id,
                nome_ferramenta=base.nome_ferramenta,
                pasta_origem=base.pasta_origem,
                tem_api=base.tem_api,
            )
            for base in data.bases
        ]
        bi = Bi(
            id=bi_id,
            nome=data.nome,
            data_inicio=data.data_inicio,
            data_final=data.data_final,
            responsavel=data.responsavel,
            operacao=data.operacao,
            created_at=utc_now(),
            bases=bases,
        )
        return self.repo.create(bi)

    def update_bi(self, bi_id: str, patch: BiUpdate) -> Bi:
        """Apply the fields present in the patch"""
        fields = patch.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        if not fields:
            return self.repo.get_or_raise(bi_id)
        return self.repo.update(bi_id, fields)

    def set_inativo(self, bi_id: str, inativo: bool) -> Bi:
        """Mark a BI inactive (or active again)"""
        bi = self.repo.update(bi_id, {"inativo": inativo})
        logger.info(f"BI {bi_id} inativo={inativo}", extra={"bi_id": bi_id})
        return bi

    def delete_bi(self, bi_id: str) -> None:
        if not self.repo.delete(bi_id):
            raise BiNotFoundError("BI not found", details={"bi_id": bi_id})

    def update_base_status(
        self,
        base_id: str,
        status: BaseStatus,
        observacao: Optional[str] = None,
        bi_id: Optional[str] = None
    ) -> Bi:
        """
        Set a base's status and re-evaluate its BI.

        The BI becomes concluido as soon as every base is concluido. It is
        never moved back automatically.

        Args:
            base_id: Base to update
            status: New base status
            observacao: Replaces the note only when given
            bi_id: Owning BI, saves a lookup when the caller knows it

        Returns:
            The owning BI with its updated bases
        """
        with self._lock:
            if bi_id:
                bi = self.repo.get_or_raise(bi_id)
            else:
                bi = self.repo.find_by_base_id(base_id)
            base = next((b for b in bi.bases if b.id == base_id), None) if bi else None
            if base is None:
                raise BaseNotFoundError("Base not found", details={"base_id": base_id})

            base.status = status
            if observacao is not None:
                base.observacao = observacao

            if bi.status != BiStatus.CONCLUIDO and all_bases_concluded(bi.bases):
                bi.status = BiStatus.CONCLUIDO
                logger.info(f"BI {bi.id} concluded: all bases done", extra={"bi_id": bi.id})

            updated = self.repo.save(bi)

        logger.info(
            f"Base {base_id} status set to {status.value}",
            extra={"base_id": base_id, "bi_id": bi.id, "status": status.value}
        )
        return updated
