"""
Error taxonomy shared by the service layer and the API boundary.

Each error carries the HTTP status and the client-facing message it maps to.
The API registers a single handler for ``AppError`` that renders
``{"error": message}``; no other detail reaches the client.
"""


class AppError(Exception):
    """Base class for errors the API translates into an HTTP response."""

    status_code: int = 500
    message: str = "Erro interno do servidor"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class EmailInUseError(AppError):
    """Raised when registering an email that already belongs to a user."""

    status_code = 409
    message = "Email já cadastrado"


class InvalidCredentialsError(AppError):
    """
    Raised on login with an unknown email or a wrong password.

    Both cases use this same error so the response does not reveal which
    field was wrong.
    """

    status_code = 401
    message = "Credenciais inválidas"


class MissingTokenError(AppError):
    """Raised when the Authorization header is absent or not ``Bearer <token>``."""

    status_code = 401
    message = "Token não fornecido"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidTokenError(AppError):
    """Raised for a bad signature, expired token, or issuer/audience mismatch."""

    status_code = 401
    message = "Token inválido"
    headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(AppError):
    """Raised when a task or user lookup finds nothing."""

    status_code = 404
    message = "Recurso não encontrado"


class ValidationError(AppError):
    """Raised when a required field is missing or empty."""

    status_code = 400
    message = "Dados inválidos"


class UpstreamFailureError(AppError):
    """
    Raised when the database, cache or object store fails.

    ``detail`` is for server-side logs only; the client always gets the
    class-level message.
    """

    status_code = 500
    message = "Erro interno do servidor"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        Exception.__init__(self, detail or self.message)


class CacheError(UpstreamFailureError):
    """Raised by cache clients when the key-value store is unreachable or errors."""


class PhotoUploadError(UpstreamFailureError):
    """Raised when the object store rejects or fails a profile photo upload."""

    message = "Erro ao fazer upload da imagem"


class TaskCreateError(UpstreamFailureError):
    """Raised when storing a new task or invalidating the task list fails."""

    message = "Erro ao criar tarefa"


class TaskUpdateError(UpstreamFailureError):
    """Raised when updating a task or invalidating the task list fails."""

    message = "Erro ao atualizar tarefa"


class TaskDeleteError(UpstreamFailureError):
    """Raised when deleting a task or invalidating the task list fails."""

    message = "Erro ao deletar tarefa"
