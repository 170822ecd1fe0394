from .file_verifier import FileVerificationService

__all__ = ["FileVerificationService"]
