from flask import Blueprint, g
from patrimonio.presentation.middleware import authenticate, chain, require_admin, validate_body
from patrimonio.presentation.responses import send_created, send_success
from patrimonio.presentation.schemas.usuario import UsuarioCreateSchema, UsuarioUpdateSchema
from patrimonio.services.core.usuario_service import UsuarioService

bp = Blueprint('usuarios', __name__)


@bp.route('', methods=['GET'])
@chain(authenticate)
def list_usuarios():
    return send_success([u.to_dict(include_relationships=True) for u in UsuarioService.list_all()])


@bp.route('/<usuario_id>', methods=['GET'])
@chain(authenticate)
def get_usuario(usuario_id):
    return send_success(UsuarioService.get(usuario_id).to_dict(include_relationships=True))


@bp.route('', methods=['POST'])
@chain(authenticate, require_admin, validate_body(UsuarioCreateSchema))
def create_usuario():
    usuario = UsuarioService.create(g.body.to_data())
    return send_created(usuario.to_dict(include_relationships=True), 'Usuário criado com sucesso')


@bp.route('/<usuario_id>', methods=['PUT'])
@chain(authenticate, require_admin, validate_body(UsuarioUpdateSchema))
def update_usuario(usuario_id):
    usuario = UsuarioService.update(usuario_id, g.body.to_data())
    return send_success(usuario.to_dict(include_relationships=True), 'Usuário atualizado com sucesso')


@bp.route('/<usuario_id>', methods=['DELETE'])
@chain(authenticate, require_admin)
def delete_usuario(usuario_id):
    UsuarioService.delete(usuario_id)
    return send_success(message='Usuário excluído com sucesso')
