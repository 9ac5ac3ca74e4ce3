from patrimonio import db
from datetime import datetime, timezone
import uuid
from patrimonio.buisness.core.data_insertion_mixin import DataInsertionMixin


def generate_uuid():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class PatrimonioBase(db.Model, DataInsertionMixin):
    """Abstract base class for every table: UUID primary key plus timestamps"""

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class ReferenceBase(PatrimonioBase):
    """Shared shape of the lookup tables (perfis, categorias, localizacoes, tipos_movimentacao)"""

    __abstract__ = True

    nome = db.Column(db.String(100), unique=True, nullable=False)
    descricao = db.Column(db.Text, nullable=True)
    ativo = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.nome}>'
