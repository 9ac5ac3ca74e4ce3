from flask import Blueprint, g
from patrimonio.presentation.middleware import authenticate, chain, validate_body
from patrimonio.presentation.responses import send_created, send_success
from patrimonio.presentation.schemas.bem import BemCreateSchema, BemUpdateSchema
from patrimonio.services.core.bem_service import BemService

bp = Blueprint('bens', __name__)


@bp.route('', methods=['GET'])
@chain(authenticate)
def list_bens():
    bens = BemService.list_active()
    return send_success([bem.to_dict(include_relationships=True) for bem in bens])


@bp.route('/tombo/<tombo>', methods=['GET'])
@chain(authenticate)
def get_bem_by_tombo(tombo):
    return send_success(BemService.get_by_tombo(tombo).to_dict(include_relationships=True))


@bp.route('/<bem_id>', methods=['GET'])
@chain(authenticate)
def get_bem(bem_id):
    return send_success(BemService.get(bem_id).to_dict(include_relationships=True))


@bp.route('', methods=['POST'])
@chain(authenticate, validate_body(BemCreateSchema))
def create_bem():
    bem = BemService.create(g.body.to_data())
    return send_created(bem.to_dict(include_relationships=True), 'Bem criado com sucesso')


@bp.route('/<bem_id>', methods=['PUT'])
@chain(authenticate, validate_body(BemUpdateSchema))
def update_bem(bem_id):
    bem = BemService.update(bem_id, g.body.to_data())
    return send_success(bem.to_dict(include_relationships=True), 'Bem atualizado com sucesso')


@bp.route('/<bem_id>', methods=['DELETE'])
@chain(authenticate)
def delete_bem(bem_id):
    BemService.delete(bem_id)
    return send_success(message='Bem excluído com sucesso')
