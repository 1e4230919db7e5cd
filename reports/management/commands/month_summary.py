from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from core.money import money
from core.periods import is_valid_ym
from reports.services import aggregate_month

ROWS = [
    ("Income", "income_thb"),
    ("Expenses", "expense_thb"),
    ("Net", "net_thb"),
    ("Ad spend (billed)", "ad_spend_thb"),
    ("Invoices", "invoice_total_thb"),
    ("Paid", "invoice_paid_thb"),
    ("Outstanding", "outstanding_thb"),
    ("Training payments", "training_paid_thb"),
]


class Command(BaseCommand):
    help = "Print one owner's monthly totals in THB"

    def add_arguments(self, parser):
        parser.add_argument("--owner", required=True, help="Owner email")
        parser.add_argument("--month", help="YYYY-MM (defaults to the current month)")

    def handle(self, *args, **options):
        month = options.get("month")
        if month and not is_valid_ym(month):
            raise CommandError(f"Invalid month '{month}', expected YYYY-MM")
        User = get_user_model()
        owner = User.objects.filter(email__iexact=options["owner"]).first()
        if not owner:
            raise CommandError(f"No user with email {options['owner']}")
        summary = aggregate_month(owner, month)
        self.stdout.write(self.style.SUCCESS(f"Monthly summary {summary.ym} for {owner.email}"))
        for label, attr in ROWS:
            self.stdout.write(f"  {label:<20} {money(getattr(summary, attr)):>14} THB")
