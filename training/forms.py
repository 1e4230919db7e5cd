from decimal import Decimal

from django import forms
from django.utils import timezone

from core.money import CURRENCY_CHOICES, MMK, THB
from .models import Course, Enrollment, Student


class CourseForm(forms.ModelForm):
    class Meta:
        model = Course
        fields = ["title", "batch", "fee_currency", "fee_amount"]


class StudentForm(forms.ModelForm):
    class Meta:
        model = Student
        fields = ["name", "email", "viber_phone"]


class EnrollmentForm(forms.Form):
    student = forms.ModelChoiceField(queryset=Student.objects.none())
    course = forms.ModelChoiceField(queryset=Course.objects.none())
    total_currency = forms.ChoiceField(choices=CURRENCY_CHOICES, initial=MMK)
    total_amount = forms.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0"))
    rate = forms.DecimalField(label="Rate to THB", max_digits=12, decimal_places=4, required=False)

    def __init__(self, *args, owner=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["student"].queryset = Student.objects.filter(owner=owner)
        self.fields["course"].queryset = Course.objects.filter(owner=owner)


class StudentPaymentForm(forms.Form):
    enrollment = forms.ModelChoiceField(queryset=Enrollment.objects.none())
    date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    currency = forms.ChoiceField(choices=CURRENCY_CHOICES, initial=THB)
    amount = forms.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0.01"))
    rate = forms.DecimalField(label="Rate to THB", max_digits=12, decimal_places=4, required=False)
    method = forms.CharField(max_length=64, required=False)
    note = forms.CharField(max_length=255, required=False)

    def __init__(self, *args, owner=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["enrollment"].queryset = Enrollment.objects.select_related("student", "course").filter(
            student__owner=owner
        )
        self.fields["date"].initial = timezone.now().date()
