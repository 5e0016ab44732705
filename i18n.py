"""Arabic-first message catalogue.

``gettext(key)`` returns the message for the active locale, falling back to
Arabic and finally to the key itself. The locale comes from ``?lang=``, then
the ``lang`` cookie, then ``DEFAULT_LANGUAGE``.
"""

from flask import current_app, has_request_context, request

RTL_LANGUAGES = {"ar"}

MESSAGES = {
    "ar": {
        "site_name": "فل سكو",
        "invalid_credentials": "اسم المستخدم أو كلمة المرور غير صحيحة",
        "credentials_required": "اسم المستخدم وكلمة المرور مطلوبان",
        "login_success": "تم تسجيل الدخول بنجاح",
        "logout_success": "تم تسجيل الخروج بنجاح",
        "not_authenticated": "غير مصرح به: يجب تسجيل الدخول",
        "session_expired": "انتهت صلاحية الجلسة، يرجى تسجيل الدخول مجددًا",
        "forbidden": "محظور: لا تملك صلاحية لهذا الإجراء",
        "validation_failed": "خطأ في التحقق من صحة البيانات",
        "server_error": "حدث خطأ في الخادم",
        "not_found": "العنصر غير موجود",
        "invalid_id": "المعرف غير صالح",
        "slug_taken": "الاسم المختصر مستخدم بالفعل",
        "created": "تم الإنشاء بنجاح",
        "updated": "تم التحديث بنجاح",
        "deleted": "تم الحذف بنجاح",
        "delete_not_allowed": "لا يمكن حذف هذا العنصر",
        "subscribed": "تم الاشتراك بنجاح في النشرة البريدية",
        "already_subscribed": "هذا البريد الإلكتروني مشترك بالفعل",
        "invalid_email": "يرجى إدخال بريد إلكتروني صالح",
        "username_taken": "اسم المستخدم مستخدم بالفعل",
        "email_taken": "البريد الإلكتروني مستخدم بالفعل",
        "page_path_taken": "يوجد إعداد SEO لهذا المسار بالفعل",
        "password_required": "كلمة المرور مطلوبة",
        "settings_saved": "تم حفظ إعدادات الموقع",
        "search_empty": "أدخل كلمة للبحث",
        "uploaded": "تم رفع الملف",
        "invalid_file": "نوع الملف غير مدعوم",
    },
    "en": {
        "site_name": "FullSco",
        "invalid_credentials": "Invalid username or password",
        "credentials_required": "Username and password are required",
        "login_success": "Signed in successfully",
        "logout_success": "Signed out successfully",
        "not_authenticated": "Unauthorized: please sign in",
        "session_expired": "Your session has expired, please sign in again",
        "forbidden": "Forbidden: you are not allowed to do this",
        "validation_failed": "Validation failed",
        "server_error": "Internal server error",
        "not_found": "Item not found",
        "invalid_id": "Invalid id",
        "slug_taken": "This slug is already in use",
        "created": "Created successfully",
        "updated": "Updated successfully",
        "deleted": "Deleted successfully",
        "delete_not_allowed": "This item cannot be deleted",
        "subscribed": "You are now subscribed to the newsletter",
        "already_subscribed": "This email is already subscribed",
        "invalid_email": "Please enter a valid email address",
        "username_taken": "This username is already taken",
        "email_taken": "This email is already in use",
        "page_path_taken": "This path already has SEO settings",
        "password_required": "Password is required",
        "settings_saved": "Site settings saved",
        "search_empty": "Enter a search term",
        "uploaded": "File uploaded",
        "invalid_file": "Unsupported file type",
    },
}


def get_locale() -> str:
    default = "ar"
    if not has_request_context():
        return default
    supported = current_app.config.get("SUPPORTED_LANGUAGES", ("ar", "en"))
    for candidate in (request.args.get("lang"), request.cookies.get("lang")):
        if candidate in supported:
            return candidate
    return current_app.config.get("DEFAULT_LANGUAGE", default)


def text_direction(locale: str | None = None) -> str:
    return "rtl" if (locale or get_locale()) in RTL_LANGUAGES else "ltr"


def gettext(key: str, **params) -> str:
    locale = get_locale()
    message = MESSAGES.get(locale, {}).get(key) or MESSAGES["ar"].get(key) or key
    return message.format(**params) if params else message
