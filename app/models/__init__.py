from app.models.expense import Expense
from app.models.material import Material
from app.models.payment import Payment
from app.models.project import Project
from app.models.quotation import Quotation
from app.models.supplier_payment import SupplierPayment
from app.models.task import Task
from app.models.team import Team, TeamMember
from app.models.team_work_entry import TeamWorkEntry
from app.models.trash import QuotationTrash, SupplierPaymentTrash, TaskTrash, TeamMemberTrash, TrashLog

__all__ = [
    "Expense",
    "Material",
    "Payment",
    "Project",
    "Quotation",
    "QuotationTrash",
    "SupplierPayment",
    "SupplierPaymentTrash",
    "Task",
    "TaskTrash",
    "Team",
    "TeamMember",
    "TeamMemberTrash",
    "TeamWorkEntry",
    "TrashLog",
]
