from directupload.services.notifications import LoggingNotifier, Notifier
from directupload.services.upload_service import UploadOrchestrator
from directupload.services.validation import check_file, is_valid_file

__all__ = ["LoggingNotifier", "Notifier", "UploadOrchestrator", "check_file", "is_valid_file"]
