"""Services layer - Business logic"""

from .ledger_service import LedgerService
from .backup_service import BackupService
from .report_service import ReportService
from .excel_report_service import ExcelReportService

__all__ = ["LedgerService", "BackupService", "ReportService", "ExcelReportService"]
