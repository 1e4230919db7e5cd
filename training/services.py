import logging

from django.db.models import Sum

from core.lookups import owned
from core.money import THB, amount_error, convert_to_thb, to_decimal, to_number
from core.results import INVALID_AMOUNT, NOT_FOUND, VALIDATION, ServiceResult
from .models import Course, Enrollment, Student, StudentPayment

logger = logging.getLogger(__name__)


def _positive_rate(rate):
    """The rate as stored; ``None`` unless it is still positive at four places."""
    rate_d = to_decimal(rate, places=4)
    return rate_d if rate_d > 0 else None


def _rate_error(currency, rate_d):
    if currency != THB and rate_d is None:
        return ServiceResult.failure(
            VALIDATION, f"Exchange rate required for {currency}", {"rate": [f"Exchange rate required for {currency}."]}
        )
    problem = amount_error(rate_d, max_digits=12, places=4) if rate_d is not None else None
    if problem:
        return ServiceResult.failure(VALIDATION, "Invalid exchange rate", {"rate": [problem]})
    return None


def enroll(owner, student_id, course_id, total_fee_amount, total_fee_currency, rate=None, batch=""):
    student = owned(Student.objects.all(), owner, student_id)
    course = owned(Course.objects.all(), owner, course_id)
    if not student or not course:
        return ServiceResult.failure(NOT_FOUND, "Student or course not found")
    amount_d = to_decimal(total_fee_amount)
    problem = amount_error(amount_d, allow_zero=True)
    if problem:
        return ServiceResult.failure(INVALID_AMOUNT, "Invalid fee", {"totalFeeAmount": [problem]})
    rate_d = _positive_rate(rate)
    error = _rate_error(total_fee_currency, rate_d)
    if error:
        return error
    fee_thb = to_decimal(convert_to_thb(amount_d, total_fee_currency, rate_d))
    if amount_error(fee_thb, allow_zero=True):
        return ServiceResult.failure(INVALID_AMOUNT, "Invalid fee", {"totalFeeAmount": ["Amount is too large."]})
    enrollment = Enrollment.objects.create(
        student=student,
        course=course,
        batch=batch or course.batch,
        total_fee_currency=total_fee_currency,
        total_fee_amount=amount_d,
        rate=rate_d,
        total_fee_thb=fee_thb,
    )
    logger.info("Enrolled student %s in course %s (%s %s)", student.pk, course.pk, amount_d, total_fee_currency)
    return ServiceResult.success(enrollment)


def record_student_payment(owner, enrollment_id, date, amount, currency=THB, rate=None, method="", note=""):
    enrollment = owned(Enrollment.objects.select_related("student"), owner, enrollment_id, owner_field="student__owner")
    if not enrollment:
        return ServiceResult.failure(NOT_FOUND, "Enrollment not found")
    amount_d = to_decimal(amount)
    problem = amount_error(amount_d)
    if problem:
        return ServiceResult.failure(INVALID_AMOUNT, "Invalid amount", {"amount": [problem]})
    rate_d = _positive_rate(rate)
    error = _rate_error(currency, rate_d)
    if error:
        return error
    amount_thb = to_decimal(convert_to_thb(amount_d, currency, rate_d))
    if amount_error(amount_thb, allow_zero=True):
        return ServiceResult.failure(INVALID_AMOUNT, "Invalid amount", {"amount": ["Amount is too large."]})
    payment = StudentPayment.objects.create(
        enrollment=enrollment,
        date=date,
        currency=currency,
        amount=amount_d,
        rate=rate_d,
        amount_thb=amount_thb,
        method=method or "",
        note=note or "",
    )
    logger.info("Student payment %s on enrollment %s: %s THB", payment.pk, enrollment.pk, payment.amount_thb)
    return ServiceResult.success(payment)


def training_paid_thb(owner, window) -> float:
    agg = StudentPayment.objects.filter(
        enrollment__student__owner=owner, date__gte=window.start, date__lt=window.end
    ).aggregate(total=Sum("amount_thb"))
    return to_number(agg["total"])
