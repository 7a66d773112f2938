"""
Domain errors

Services raise these; the handler registered in academy.main turns them into
HTTP responses.
"""


class AppError(Exception):
    """Base class cho mọi lỗi nghiệp vụ"""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class ValidationError(AppError):
    """Dữ liệu đầu vào sai định dạng hoặc bị trùng"""

    status_code = 400


class AuthError(AppError):
    """Sai thông tin đăng nhập, token không hợp lệ hoặc hết hạn"""

    status_code = 401


class ForbiddenError(AppError):
    """Đã xác thực nhưng không đủ quyền"""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Ví dụ: badge đã được gán cho khóa học khác"""

    status_code = 409


class PersistenceError(AppError):
    """Ghi database thất bại"""

    status_code = 500


class AIServiceError(AppError):
    """Dịch vụ AI chưa cấu hình hoặc trả về kết quả không dùng được"""

    status_code = 503
