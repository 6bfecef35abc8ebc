from django.contrib import admin

from .models import Invoice, Load, LoadStatusHistory


class LoadStatusHistoryInline(admin.TabularInline):
    model = LoadStatusHistory
    extra = 0
    can_delete = False
    readonly_fields = ("status", "timestamp", "notes")

    def has_add_permission(self, request, obj=None):
        return False


# Register your models here.
@admin.register(Load)
class LoadAdmin(admin.ModelAdmin):
    list_display = ("number", "status", "driver", "tracking_enabled", "updated_at")
    list_filter = ("status", "tracking_enabled")
    search_fields = ("number", "destination_name")
    # status changes go through LoadStatusService so history stays complete
    readonly_fields = ("status",)
    inlines = [LoadStatusHistoryInline]


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ("invoice_number", "load", "status", "total_amount", "finalized_at")
    list_filter = ("status",)
    search_fields = ("invoice_number", "load__number")
