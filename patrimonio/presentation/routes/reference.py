"""
Reference data routes

The four lookup tables share one route contract; a blueprint is built per
table from its service and schemas. Reads need a valid token, writes need
the ADMIN role.
"""

from flask import Blueprint, g
from patrimonio.presentation.middleware import authenticate, chain, require_admin, validate_body
from patrimonio.presentation.responses import send_created, send_success
from patrimonio.presentation.schemas.reference import (
    LocalizacaoCreateSchema,
    LocalizacaoUpdateSchema,
    PerfilCreateSchema,
    PerfilUpdateSchema,
    ReferenceCreateSchema,
    ReferenceUpdateSchema,
    TipoMovimentacaoCreateSchema,
    TipoMovimentacaoUpdateSchema,
)
from patrimonio.services.core.reference_service import (
    CategoriaService,
    LocalizacaoService,
    PerfilService,
    TipoMovimentacaoService,
)

REFERENCE_RESOURCES = (
    # url prefix, blueprint name, service, create schema, update schema
    ('/api/perfis', 'perfis', PerfilService, PerfilCreateSchema, PerfilUpdateSchema),
    ('/api/categorias', 'categorias', CategoriaService, ReferenceCreateSchema, ReferenceUpdateSchema),
    ('/api/localizacoes', 'localizacoes', LocalizacaoService, LocalizacaoCreateSchema, LocalizacaoUpdateSchema),
    ('/api/tipos-movimentacao', 'tipos_movimentacao', TipoMovimentacaoService,
     TipoMovimentacaoCreateSchema, TipoMovimentacaoUpdateSchema),
)


def create_reference_blueprint(name, service, create_schema, update_schema):
    bp = Blueprint(name, __name__)
    label = service.label.capitalize()

    @bp.route('', methods=['GET'])
    @chain(authenticate)
    def list_rows():
        return send_success([row.to_dict() for row in service.list_active()])

    @bp.route('/<row_id>', methods=['GET'])
    @chain(authenticate)
    def get_row(row_id):
        return send_success(service.get(row_id).to_dict())

    @bp.route('', methods=['POST'])
    @chain(authenticate, require_admin, validate_body(create_schema))
    def create_row():
        row = service.create(g.body.to_data())
        return send_created(row.to_dict(), f'{label} criado(a) com sucesso')

    @bp.route('/<row_id>', methods=['PUT'])
    @chain(authenticate, require_admin, validate_body(update_schema))
    def update_row(row_id):
        row = service.update(row_id, g.body.to_data())
        return send_success(row.to_dict(), f'{label} atualizado(a) com sucesso')

    @bp.route('/<row_id>', methods=['DELETE'])
    @chain(authenticate, require_admin)
    def delete_row(row_id):
        service.delete(row_id)
        return send_success(message=f'{label} excluído(a) com sucesso')

    return bp


def build_reference_blueprints():
    """
    Returns:
        list: (url_prefix, blueprint) pairs
    """
    return [
        (url_prefix, create_reference_blueprint(name, service, create_schema, update_schema))
        for url_prefix, name, service, create_schema, update_schema in REFERENCE_RESOURCES
    ]
