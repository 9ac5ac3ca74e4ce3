"""
Domain exceptions for the asset management backend

These exceptions represent business rule violations and domain-specific errors.
They are raised by the business and service layers at the point of violation
and turned into the JSON error envelope by presentation.errors.

Each class carries the HTTP status it maps to and a default error code; the
code and message can be overridden per raise.
"""


class PatrimonioDomainError(Exception):
    """Base exception for all domain errors"""

    status_code = 400
    default_code = 'DOMAIN_ERROR'
    default_message = 'Requisição inválida'

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details
        super().__init__(self.message)


class RequestValidationError(PatrimonioDomainError):
    """Raised when a request body, path or query parameter fails validation"""
    status_code = 400
    default_code = 'VALIDATION_ERROR'
    default_message = 'Dados inválidos'


class EntityNotFoundError(PatrimonioDomainError):
    """Raised when a referenced row does not exist or is inactive"""
    status_code = 404
    default_code = 'NOT_FOUND'
    default_message = 'Registro não encontrado'


class UniquenessConflictError(PatrimonioDomainError):
    """Raised when a unique value (tombo, email, nome) is already taken"""
    status_code = 409
    default_code = 'ALREADY_EXISTS'
    default_message = 'Registro já existe'


class LoanStateError(PatrimonioDomainError):
    """Raised when a loan/return transition is not allowed for the asset's current state"""
    status_code = 400
    default_code = 'ITEM_ALREADY_ON_LOAN'
    default_message = 'Este item já está emprestado'


class AccountProtectionError(PatrimonioDomainError):
    """Raised when an operation would alter a protected account or fails a credential check"""
    status_code = 400
    default_code = 'CANNOT_UPDATE_ADMIN'
    default_message = 'Operação não permitida para esta conta'


class DependencyError(PatrimonioDomainError):
    """Raised when deleting a row that live rows still reference"""
    status_code = 400
    default_code = 'HAS_DEPENDENCIES'
    default_message = 'Registro possui dependências ativas'


class AuthenticationError(PatrimonioDomainError):
    """Raised when the caller cannot be identified"""
    status_code = 401
    default_code = 'INVALID_TOKEN'
    default_message = 'Token inválido ou expirado'


class AuthorizationError(PatrimonioDomainError):
    """Raised when an identified caller may not perform the operation"""
    status_code = 403
    default_code = 'FORBIDDEN'
    default_message = 'Acesso negado'
