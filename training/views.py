from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render

from .forms import CourseForm, EnrollmentForm, StudentForm, StudentPaymentForm
from .models import Course, Enrollment, Student
from core.views import month_context
from .services import enroll, record_student_payment, training_paid_thb

FORMS = {
    "course": CourseForm,
    "student": StudentForm,
    "enrollment": EnrollmentForm,
    "payment": StudentPaymentForm,
}


def _build(kind, request, data=None):
    cls = FORMS[kind]
    if kind in ("enrollment", "payment"):
        return cls(data, owner=request.user, prefix=kind)
    return cls(data, prefix=kind)


def _handle(kind, form, request):
    if kind in ("course", "student"):
        obj = form.save(commit=False)
        obj.owner = request.user
        obj.save()
        messages.success(request, f"{kind.title()} saved.")
        return True
    data = form.cleaned_data
    if kind == "enrollment":
        result = enroll(
            request.user,
            data["student"].pk,
            data["course"].pk,
            data["total_amount"],
            data["total_currency"],
            rate=data["rate"],
        )
    else:
        result = record_student_payment(
            request.user,
            data["enrollment"].pk,
            data["date"],
            data["amount"],
            currency=data["currency"],
            rate=data["rate"],
            method=data["method"],
            note=data["note"],
        )
    if result.ok:
        messages.success(request, f"{kind.title()} saved.")
        return True
    messages.error(request, result.message)
    return False


@login_required
def index(request):
    forms = {kind: _build(kind, request) for kind in FORMS}
    if request.method == "POST":
        kind = request.POST.get("form")
        if kind in FORMS:
            form = _build(kind, request, request.POST)
            if form.is_valid() and _handle(kind, form, request):
                return redirect("training:index")
            forms[kind] = form
    enrollments = (
        Enrollment.objects.select_related("student", "course")
        .prefetch_related("payments")
        .filter(student__owner=request.user)[:20]
    )
    window, ctx = month_context(request, "training")
    ctx.update(
        {
            "forms": forms,
            "courses": Course.objects.filter(owner=request.user)[:20],
            "students": Student.objects.filter(owner=request.user)[:20],
            "enrollments": enrollments,
            "paid_this_month": training_paid_thb(request.user, window),
        }
    )
    return render(request, "training/index.html", ctx)
