"""
Service base para cadastros (CRUD).

Localização: finance/services/base_service.py

Cada service de cadastro define o repository, a função do modelo que
monta/valida o documento e se o campo 'code' deve ser único.
"""
from typing import Any, Dict, List, Optional

from core.decorators import audit_log


def ensure_payload(payload: Any) -> Dict[str, Any]:
    """Garante que o corpo recebido é um objeto JSON."""
    if not isinstance(payload, dict):
        raise ValueError("Corpo da requisição deve ser um objeto JSON.")
    return payload


def ensure_payload_list(payload: Any, label: str) -> List[Dict[str, Any]]:
    """Garante que o corpo recebido é uma lista não vazia de objetos."""
    if not isinstance(payload, list) or not payload:
        raise ValueError(f"Nenhum(a) {label} fornecido(a).")
    for item in payload:
        ensure_payload(item)
    return payload


class CrudService:
    """
    Operações de cadastro comuns a bancos, contas, categorias, custos fixos,
    lançamentos e receitas.

    Subclasses definem:
        entity: Nome da entidade (logs)
        label: Nome em português (mensagens de erro)
        build: Função (payload, existing) -> documento
        unique_code: Se o campo 'code' é único
        default_sort: Ordenação da listagem
    """

    entity = 'record'
    label = 'registro'
    unique_code = False
    default_sort = None

    def __init__(self, repository):
        self.repo = repository

    def build(self, payload: Dict[str, Any], existing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        raise NotImplementedError

    def validate_unique_code(self, data: Dict[str, Any], exclude_id: Optional[str] = None):
        """
        Raises:
            ValueError: Se já existir outro documento com o mesmo código
        """
        if not self.unique_code:
            return
        if self.repo.find_by_code(data['code'], exclude_id=exclude_id):
            raise ValueError(f"Já existe {self.label} com o código '{data['code']}'.")

    def list(self) -> List[Dict[str, Any]]:
        return self.repo.find_all(sort=self.default_sort)

    def get(self, document_id: str) -> Optional[Dict[str, Any]]:
        return self.repo.find_by_id(document_id)

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        data = self.build(ensure_payload(payload))
        self.validate_unique_code(data)
        return self.repo.create(data)

    def update(self, document_id: str, payload: Dict[str, Any]) -> bool:
        """
        Substitui o documento.

        Returns:
            False se o documento não existe
        """
        existing = self.repo.find_by_id(document_id)
        if not existing:
            return False

        data = self.build(ensure_payload(payload), existing)
        self.validate_unique_code(data, exclude_id=document_id)
        return self.repo.replace(document_id, data)

    def delete(self, document_id: str) -> bool:
        return self.repo.delete(document_id)


def audited(cls):
    """
    Aplica o decorator de auditoria às operações de escrita do service.
    """
    for action in ('create', 'update', 'delete'):
        method = getattr(cls, action)
        setattr(cls, action, audit_log(action=action, entity=cls.entity)(method))
    return cls


