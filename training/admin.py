from django.contrib import admin
from .models import Course, Enrollment, Student, StudentPayment

@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("title", "batch", "fee_amount", "fee_currency", "owner")
    search_fields = ("title", "batch")

@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "viber_phone", "owner")
    search_fields = ("name", "email", "viber_phone")

class StudentPaymentInline(admin.TabularInline):
    model = StudentPayment
    extra = 0

@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ("student", "course", "batch", "total_fee_amount", "total_fee_currency", "total_fee_thb", "status")
    list_filter = ("status", "total_fee_currency")
    search_fields = ("student__name", "course__title")
    inlines = [StudentPaymentInline]

@admin.register(StudentPayment)
class StudentPaymentAdmin(admin.ModelAdmin):
    list_display = ("enrollment", "date", "amount", "currency", "amount_thb", "method")
    list_filter = ("currency",)
    date_hierarchy = "date"
