from flask import Blueprint, g
from flask_login import current_user
from patrimonio.presentation.middleware import authenticate, chain, validate_body
from patrimonio.presentation.responses import send_created, send_success
from patrimonio.presentation.schemas.movimentacao import MovimentacaoCreateSchema, MovimentacaoUpdateSchema
from patrimonio.services.core.movimentacao_service import MovimentacaoService

bp = Blueprint('movimentacoes', __name__)


def _serialize(movimentacao):
    return movimentacao.to_dict(include_relationships=True)


@bp.route('', methods=['GET'])
@chain(authenticate)
def list_movimentacoes():
    return send_success([_serialize(m) for m in MovimentacaoService.list_all()])


@bp.route('/active', methods=['GET'])
@chain(authenticate)
def list_active_loans():
    return send_success([_serialize(m) for m in MovimentacaoService.list_open_loans()])


@bp.route('/<movimentacao_id>', methods=['GET'])
@chain(authenticate)
def get_movimentacao(movimentacao_id):
    return send_success(_serialize(MovimentacaoService.get(movimentacao_id)))


@bp.route('', methods=['POST'])
@chain(authenticate, validate_body(MovimentacaoCreateSchema))
def create_movimentacao():
    movimentacao = MovimentacaoService.create(g.body.to_data(), current_user.id)
    return send_created(_serialize(movimentacao), 'Movimentação registrada com sucesso')


@bp.route('/<movimentacao_id>', methods=['PUT'])
@chain(authenticate, validate_body(MovimentacaoUpdateSchema))
def update_movimentacao(movimentacao_id):
    movimentacao = MovimentacaoService.update(movimentacao_id, g.body.to_data())
    return send_success(_serialize(movimentacao), 'Movimentação atualizada com sucesso')


@bp.route('/<movimentacao_id>/return', methods=['POST'])
@chain(authenticate)
def register_return(movimentacao_id):
    movimentacao = MovimentacaoService.register_return(movimentacao_id)
    return send_success(_serialize(movimentacao), 'Devolução registrada com sucesso')
