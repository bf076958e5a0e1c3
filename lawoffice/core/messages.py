from __future__ import annotations

# User-facing strings (Arabic UI).
MESSAGES: dict[str, str] = {
    # authentication
    "auth.required": "يجب تسجيل الدخول للقيام بهذه العملية",
    "auth.client.create": "يجب تسجيل الدخول لإضافة عميل",
    "auth.client.update": "يجب تسجيل الدخول لتحديث بيانات العميل",
    "auth.client.delete": "يجب تسجيل الدخول لحذف العميل",
    "auth.case.create": "يجب تسجيل الدخول لإضافة قضية",
    "auth.case.update": "يجب تسجيل الدخول لتحديث القضية",
    "auth.case.delete": "يجب تسجيل الدخول لحذف القضية",
    "auth.session.create": "يجب تسجيل الدخول لإضافة جلسة محكمة",
    "auth.session.update": "يجب تسجيل الدخول لتحديث جلسة المحكمة",
    "auth.session.delete": "يجب تسجيل الدخول لحذف جلسة المحكمة",
    "auth.bill.create": "يجب تسجيل الدخول لإضافة فاتورة",
    "auth.bill.update": "يجب تسجيل الدخول لتحديث الفاتورة",
    "auth.bill.delete": "يجب تسجيل الدخول لحذف الفاتورة",
    "auth.receipt.create": "يجب تسجيل الدخول لإضافة إيصال جديد",
    "auth.receipt.update": "يجب تسجيل الدخول لتحديث حالة الإيصال",
    "auth.receipt.delete": "يجب تسجيل الدخول لحذف الإيصال",
    "auth.invoice.create": "يجب تسجيل الدخول لإنشاء فاتورة جديدة",
    "auth.invoice.update": "يجب تسجيل الدخول لتحديث الفاتورة",
    # generic
    "error.unexpected": "حدث خطأ غير متوقع. الرجاء المحاولة مرة أخرى.",
    "error.store": "خطأ في قاعدة البيانات: {detail}",
    "error.not_found": "العنصر المطلوب غير موجود",
    "error.validation": "يرجى تصحيح الحقول المحددة",
    "field.required": "هذا الحقل مطلوب",
    "field.invalid": "قيمة غير صالحة",
    # clients
    "client.name_required": "الاسم الأول واسم العائلة مطلوبان",
    "client.type_required": "نوع العميل مطلوب",
    "client.id_required": "معرف العميل مطلوب",
    "client.not_found": "العميل غير موجود",
    "client.created": "تمت إضافة عميل جديد: {name}",
    "client.updated": "تم تحديث بيانات العميل: {name}",
    "client.deleted": "تم حذف العميل: {name}",
    # cases
    "case.title_required": "عنوان القضية مطلوب",
    "case.id_required": "معرف القضية مطلوب",
    "case.not_found": "القضية غير موجودة",
    "case.created": "تمت إضافة القضية \"{title}\"",
    "case.updated": "تم تحديث القضية \"{title}\"",
    "case.deleted": "تم حذف القضية \"{title}\"",
    # court sessions
    "session.case_required": "يجب اختيار القضية",
    "session.date_required": "تاريخ الجلسة مطلوب",
    "session.time_required": "وقت الجلسة مطلوب",
    "session.location_required": "مكان الجلسة مطلوب",
    "session.id_required": "معرف الجلسة مطلوب",
    "session.not_found": "جلسة المحكمة غير موجودة",
    "session.create_failed": "فشل في إضافة جلسة المحكمة: {detail}",
    "session.update_failed": "فشل في تحديث جلسة المحكمة: {detail}",
    "session.delete_failed": "فشل في حذف جلسة المحكمة: {detail}",
    "session.created": "تمت إضافة جلسة المحكمة بنجاح",
    "session.updated": "تم تحديث جلسة المحكمة بنجاح",
    "session.deleted": "تم حذف جلسة المحكمة بنجاح",
    "session.created.log": "تمت إضافة جلسة محكمة جديدة للقضية {case_id}",
    "session.updated.log": "تم تحديث جلسة المحكمة للقضية {case_id}",
    "session.deleted.log": "تم حذف جلسة المحكمة للقضية {case_id}",
    # case parties
    "party.required": "اسم الطرف ومعرف القضية مطلوبان",
    "party.name_required": "اسم الطرف مطلوب",
    "party.id_required": "معرف الطرف مطلوب",
    "party.not_found": "الطرف غير موجود",
    "party.created": "تمت إضافة الطرف {name} إلى القضية {case_id}",
    "party.updated": "تم تحديث الطرف {name}",
    "party.deleted": "تم حذف الطرف {name} من القضية {case_id}",
    # case documents
    "document.required": "اسم المستند ومعرف القضية مطلوبان",
    "document.name_required": "اسم المستند مطلوب",
    "document.id_required": "معرف المستند مطلوب",
    "document.not_found": "المستند غير موجود",
    "document.created": "تمت إضافة المستند {name} إلى القضية {case_id}",
    "document.updated": "تم تحديث المستند {name}",
    "document.deleted": "تم حذف المستند {name} من القضية {case_id}",
    # case events
    "event.case_required": "معرف القضية مطلوب",
    "event.date_required": "تاريخ الحدث مطلوب",
    "event.title_required": "عنوان الحدث مطلوب",
    "event.type_required": "نوع الحدث مطلوب",
    "event.id_required": "معرف الحدث مطلوب",
    "event.not_found": "الحدث غير موجود",
    "event.created": "تمت إضافة الحدث \"{title}\" إلى القضية",
    "event.updated": "تم تحديث الحدث \"{title}\"",
    "event.deleted": "تم حذف الحدث \"{title}\" من القضية",
    # bills
    "bill.required": "يرجى ملء جميع الحقول المطلوبة وتحميل ملف الفاتورة",
    "bill.not_found": "الفاتورة غير موجودة",
    "bill.created": "تمت إضافة فاتورة جديدة: {bill_type} بمبلغ {amount}",
    "bill.updated": "تم تحديث بيانات الفاتورة: {bill_type} بمبلغ {amount}",
    "bill.deleted": "تم حذف الفاتورة",
    # receipts
    "receipt.required": "جميع الحقول المطلوبة يجب ملؤها",
    "receipt.not_found": "فشل في العثور على الإيصال",
    "receipt.created": "تم إضافة إيصال جديد: {title}",
    "receipt.status_updated": "تم تحديث حالة الإيصال إلى {status}",
    "receipt.deleted": "تم حذف الإيصال",
    # invoices
    "invoice.required": "جميع الحقول المطلوبة يجب ملؤها",
    "invoice.items_invalid": "حدث خطأ في معالجة بيانات الخدمات",
    "invoice.items_required": "يجب إضافة خدمة واحدة على الأقل",
    "invoice.items_failed": "فشل في إضافة الخدمات للفاتورة",
    "invoice.not_found": "الفاتورة غير موجودة",
    "invoice.status_invalid": "حالة الفاتورة غير صالحة",
    "invoice.created": "تم إنشاء فاتورة جديدة برقم {number}",
    "invoice.updated": "تم تحديث الفاتورة رقم {number}",
    "invoice.status_updated": "تم تحديث حالة الفاتورة إلى {status}",
    "invoice.pdf_generated": "تم إنشاء ملف PDF للفاتورة رقم {number}",
}


def msg(key: str, **kwargs) -> str:
    text = MESSAGES.get(key, key)
    return text.format(**kwargs) if kwargs else text
