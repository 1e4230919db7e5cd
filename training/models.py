from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Sum

from core.money import CURRENCY_CHOICES, MMK, THB, to_number


class Course(models.Model):
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="courses")
    title = models.CharField(max_length=200)
    batch = models.CharField(max_length=64)
    fee_currency = models.CharField(max_length=3, choices=CURRENCY_CHOICES, default=MMK)
    fee_amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.title} • {self.batch}"


class Student(models.Model):
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="training_students")
    name = models.CharField(max_length=128)
    email = models.EmailField(blank=True)
    viber_phone = models.CharField(max_length=32, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.name


class Enrollment(models.Model):
    STATUS_CHOICES = [("ACTIVE", "Active"), ("COMPLETED", "Completed"), ("CANCELLED", "Cancelled")]

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="enrollments")
    course = models.ForeignKey(Course, on_delete=models.PROTECT, related_name="enrollments")
    batch = models.CharField(max_length=64, blank=True)
    total_fee_currency = models.CharField(max_length=3, choices=CURRENCY_CHOICES, default=MMK)
    total_fee_amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    rate = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    total_fee_thb = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="ACTIVE")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.student} → {self.course}"

    def paid_thb(self) -> float:
        if "payments" in getattr(self, "_prefetched_objects_cache", {}):
            return sum(to_number(p.amount_thb) for p in self.payments.all())
        return to_number(self.payments.aggregate(total=Sum("amount_thb"))["total"])

    def outstanding_thb(self) -> float:
        return max(to_number(self.total_fee_thb) - self.paid_thb(), 0.0)


class StudentPayment(models.Model):
    """Append-only ledger of what a student has paid toward an enrollment."""

    enrollment = models.ForeignKey(Enrollment, on_delete=models.CASCADE, related_name="payments")
    date = models.DateField()
    currency = models.CharField(max_length=3, choices=CURRENCY_CHOICES, default=THB)
    amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    rate = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    amount_thb = models.DecimalField(max_digits=14, decimal_places=2)
    method = models.CharField(max_length=64, blank=True)
    note = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-id"]
