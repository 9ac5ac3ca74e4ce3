from flask import Blueprint, current_app, g
from flask_login import UserMixin, current_user
from patrimonio import limiter, login_manager
from patrimonio.buisness.auth.tokens import decode_token, extract_bearer_token
from patrimonio.buisness.errors import AuthenticationError
from patrimonio.presentation.middleware import authenticate, chain, validate_body
from patrimonio.presentation.responses import send_success
from patrimonio.presentation.schemas.auth import ChangePasswordSchema, LoginSchema, RecoverPasswordSchema
from patrimonio.services.core.auth_service import AuthService
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.auth")
auth = Blueprint('auth', __name__)


class Principal(UserMixin):
    """Caller identity decoded from the bearer token"""

    def __init__(self, user_id, email, perfil_id):
        self.id = user_id
        self.email = email
        self.perfil_id = perfil_id

    def __repr__(self):
        return f'<Principal {self.email}>'


@login_manager.request_loader
def load_principal_from_request(req):
    header = req.headers.get('Authorization')
    if not header:
        return None
    try:
        token = extract_bearer_token(header)
        claims = decode_token(
            token,
            current_app.config['JWT_SECRET'],
            leeway=current_app.config['JWT_LEEWAY'],
        )
    except AuthenticationError as e:
        g.auth_failure = e
        return None
    return Principal(claims['id'], claims['email'], claims['perfilId'])


def _auth_rate_limit():
    return current_app.config['AUTH_RATE_LIMIT']


@auth.route('/login', methods=['POST'])
@limiter.limit(_auth_rate_limit)
@chain(validate_body(LoginSchema))
def login():
    logger.debug(f"Login attempt for {g.body.email}")
    token, usuario = AuthService.login(g.body.email, g.body.password)
    return send_success({'token': token, 'user': usuario.to_dict(include_relationships=True)},
                        'Login realizado com sucesso')


@auth.route('/recover-password', methods=['POST'])
@limiter.limit(_auth_rate_limit)
@chain(validate_body(RecoverPasswordSchema))
def recover_password():
    temp_password = AuthService.recover_password(g.body.email, g.body.email_recuperacao)
    return send_success({'senhaTemporaria': temp_password},
                        'Senha temporária gerada. Altere-a após o login.')


@auth.route('/change-password', methods=['PATCH'])
@chain(authenticate, validate_body(ChangePasswordSchema))
def change_password():
    AuthService.change_password(current_user.id, g.body.nova_senha)
    return send_success(message='Senha alterada com sucesso')


@auth.route('/me', methods=['GET'])
@chain(authenticate)
def me():
    usuario = AuthService.current_user(current_user.id)
    return send_success(usuario.to_dict(include_relationships=True))


@auth.route('/logout', methods=['POST'])
@chain(authenticate)
def logout():
    logger.info(f"User logged out: {current_user.email}")
    return send_success(message='Logout realizado com sucesso')
