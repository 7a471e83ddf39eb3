"""
Repository base para MongoDB.

Localização: core/repositories/base_repository.py

Este é um repository base que pode ser estendido por outros repositories
para compartilhar funcionalidades comuns.

Valores monetários são gravados como Decimal128 e lidos de volta como
decimal.Decimal (ver DecimalCodec).
"""
from typing import Optional, Dict, Any, List
from datetime import datetime
from decimal import Decimal

from bson import ObjectId
from bson.codec_options import CodecOptions, TypeCodec, TypeRegistry
from bson.decimal128 import Decimal128
from bson.errors import InvalidId
from pymongo.database import Database

from core.database import get_database


class DecimalCodec(TypeCodec):
    """Converte decimal.Decimal <-> Decimal128 de forma transparente."""

    python_type = Decimal
    bson_type = Decimal128

    def transform_python(self, value):
        return Decimal128(value)

    def transform_bson(self, value):
        return value.to_decimal()


CODEC_OPTIONS = CodecOptions(type_registry=TypeRegistry([DecimalCodec()]))


def to_object_id(document_id: Any) -> Optional[ObjectId]:
    """
    Converte string em ObjectId.

    Returns:
        ObjectId ou None se o valor não for um ID válido
    """
    if isinstance(document_id, ObjectId):
        return document_id
    try:
        return ObjectId(document_id)
    except (InvalidId, TypeError):
        return None


class BaseRepository:
    """
    Repository base com operações CRUD comuns.

    Exemplo de uso:
        class BancoRepository(BaseRepository):
            def __init__(self, database=None):
                super().__init__('banks', database)
    """

    def __init__(self, collection_name: str, database: Optional[Database] = None):
        """
        Inicializa o repository.

        Args:
            collection_name: Nome da collection no MongoDB
            database: Database a usar (opcional, padrão get_database())
        """
        self.db = database if database is not None else get_database()
        self.collection = self.db.get_collection(collection_name, codec_options=CODEC_OPTIONS)
        self._ensure_indexes()

    def _ensure_indexes(self):
        """
        Cria índices necessários.
        Deve ser sobrescrito nas classes filhas.
        """
        pass

    def find_by_id(self, document_id: str) -> Optional[Dict[str, Any]]:
        """
        Busca documento por ID.

        Args:
            document_id: ID do documento (ObjectId como string)

        Returns:
            Dict com dados do documento ou None
        """
        oid = to_object_id(document_id)
        if oid is None:
            return None
        return self.collection.find_one({'_id': oid})

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Busca um documento por query.

        Args:
            query: Query do MongoDB

        Returns:
            Dict com dados do documento ou None
        """
        return self.collection.find_one(query)

    def find_by_code(self, code: str, exclude_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Busca documento pelo código legível (campo 'code').

        Args:
            code: Código do documento
            exclude_id: ID a ignorar (usado para validar unicidade em updates)

        Returns:
            Dict com dados do documento ou None
        """
        query = {'code': code}
        oid = to_object_id(exclude_id) if exclude_id else None
        if oid is not None:
            query['_id'] = {'$ne': oid}
        return self.collection.find_one(query)

    def find_by_codes(self, codes: List[str]) -> List[Dict[str, Any]]:
        """
        Busca documentos cujo código está na lista (validação de cargas em lote).

        Args:
            codes: Lista de códigos

        Returns:
            Lista de documentos já existentes
        """
        if not codes:
            return []
        return list(self.collection.find({'code': {'$in': list(codes)}}))

    def find_all(self, sort: tuple = None) -> List[Dict[str, Any]]:
        """
        Busca todos os documentos da collection (sem limite).

        Args:
            sort: Tupla (campo, direção) para ordenação

        Returns:
            Lista de documentos
        """
        cursor = self.collection.find({})
        if sort:
            cursor = cursor.sort(sort[0], sort[1])
        return list(cursor)

    def find_many(self, query: Dict[str, Any] = None,
                  limit: int = 0, skip: int = 0,
                  sort: tuple = None) -> List[Dict[str, Any]]:
        """
        Busca múltiplos documentos.

        Args:
            query: Query do MongoDB (None para todos)
            limit: Limite de resultados (0 = sem limite)
            skip: Quantidade a pular
            sort: Tupla (campo, direção) para ordenação

        Returns:
            Lista de documentos
        """
        cursor = self.collection.find(query or {})

        if sort:
            cursor = cursor.sort(sort[0], sort[1])

        cursor = cursor.skip(skip).limit(limit)
        return list(cursor)

    def find_by_date_range(self, field: str, start_date: Optional[datetime] = None,
                           end_date: Optional[datetime] = None,
                           extra_query: Dict[str, Any] = None) -> List[Dict[str, Any]]:
        """
        Busca documentos com o campo de data dentro do intervalo (inclusivo).

        Um limite ausente significa intervalo aberto daquele lado.

        Args:
            field: Nome do campo de data
            start_date: Data inicial (opcional)
            end_date: Data final (opcional)
            extra_query: Filtros adicionais (opcional)

        Returns:
            Lista de documentos
        """
        query = dict(extra_query or {})

        if start_date or end_date:
            date_query = {}
            if start_date:
                date_query['$gte'] = start_date
            if end_date:
                date_query['$lte'] = end_date
            query[field] = date_query

        return list(self.collection.find(query))

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Cria um novo documento.

        Args:
            data: Dados do documento

        Returns:
            Dict com dados do documento criado (incluindo _id)
        """
        result = self.collection.insert_one(data)
        data['_id'] = result.inserted_id
        return data

    def create_many(self, documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Cria múltiplos documentos de uma vez.

        Args:
            documents: Lista de documentos

        Returns:
            Lista de documentos criados (com _id preenchido)
        """
        if not documents:
            return []

        result = self.collection.insert_many(documents)
        for document, inserted_id in zip(documents, result.inserted_ids):
            document['_id'] = inserted_id
        return documents

    def replace(self, document_id: str, data: Dict[str, Any]) -> bool:
        """
        Substitui um documento inteiro.

        Args:
            document_id: ID do documento
            data: Novo conteúdo do documento

        Returns:
            True se algum documento casou com o ID
        """
        oid = to_object_id(document_id)
        if oid is None:
            return False

        data = {k: v for k, v in data.items() if k != '_id'}
        result = self.collection.replace_one({'_id': oid}, data)
        return result.matched_count > 0

    def update(self, document_id: str, data: Dict[str, Any]) -> bool:
        """
        Atualiza campos de um documento.

        Args:
            document_id: ID do documento
            data: Dados a atualizar

        Returns:
            True se algum documento casou com o ID
        """
        oid = to_object_id(document_id)
        if oid is None:
            return False

        result = self.collection.update_one({'_id': oid}, {'$set': data})
        return result.matched_count > 0

    def delete(self, document_id: str) -> bool:
        """
        Deleta um documento.

        Args:
            document_id: ID do documento

        Returns:
            True se deletado com sucesso
        """
        oid = to_object_id(document_id)
        if oid is None:
            return False

        result = self.collection.delete_one({'_id': oid})
        return result.deleted_count > 0

    def delete_all(self) -> int:
        """
        Remove todos os documentos da collection.

        Returns:
            Quantidade de documentos removidos
        """
        result = self.collection.delete_many({})
        return result.deleted_count

    def count(self, query: Dict[str, Any] = None) -> int:
        """
        Conta documentos.

        Args:
            query: Query do MongoDB (None para todos)

        Returns:
            Número de documentos
        """
        return self.collection.count_documents(query or {})
