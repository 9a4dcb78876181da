# exceptions.py
# -*- coding: utf-8 -*-

"""
Custom exceptions cho CompanyInfoClient
"""


class CompanyInfoError(Exception):
    """Base exception cho tất cả lỗi của company_info"""
    pass


class ConfigurationError(CompanyInfoError):
    """Cấu hình không hợp lệ hoặc thao tác không được backend hỗ trợ"""

    def __init__(self, message: str = None, field: str = None):
        """
        Args:
            message: Thông báo lỗi
            field: Tên field / biến môi trường gây ra lỗi
        """
        self.message = message or "Cấu hình API không hợp lệ"
        self.field = field
        super().__init__(self.message)


class ValidationError(CompanyInfoError):
    """Lỗi validation search options"""

    def __init__(self, message: str = None, field: str = None):
        self.message = message or "Dữ liệu đầu vào không hợp lệ"
        self.field = field
        super().__init__(self.message)


class TransportError(CompanyInfoError):
    """Không nhận được response (DNS, connection, timeout, TLS)"""

    def __init__(self, message: str = None, url: str = None, original_error: Exception = None):
        self.message = message or "Lỗi kết nối mạng"
        self.url = url
        self.original_error = original_error
        super().__init__(self.message)


class ApiError(CompanyInfoError):
    """Server trả về response với HTTP status >= 400"""

    def __init__(
        self,
        message: str = None,
        url: str = None,
        status_code: int = None,
        body: str = None
    ):
        """
        Args:
            message: Thông báo lỗi
            url: URL gây ra lỗi
            status_code: HTTP status code
            body: Response body gốc (để chẩn đoán)
        """
        self.message = message or f"API Error: Status {status_code}"
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(self.message)
