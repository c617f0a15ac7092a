# Standard Library
import os
import time
import uuid
import base64
import logging
from io import BytesIO

# Third-party
from PIL import Image as PILImage, UnidentifiedImageError

# Django
from django.db import IntegrityError, transaction
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

# Django REST Framework
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .permissions import IsAdminToken
from .slugs import slugify_name

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
UPLOAD_ROOT = "uploads"
UPLOAD_FOLDERS = {"general", "navbar-categories", "categories", "subcategories", "products"}

_PIL_FORMAT_TO_EXT = {
    "jpeg": ".jpg",
    "png": ".png",
    "webp": ".webp",
    "gif": ".gif",
    "bmp": ".bmp",
    "tiff": ".tiff",
    "ico": ".ico",
}


class UploadRejected(ValueError):
    """The uploaded payload is not an acceptable image."""


def _is_data_url(s) -> bool:
    return isinstance(s, str) and s.startswith("data:image/")


def _infer_ext(filename: str, pil_format: str | None) -> str:
    if pil_format and pil_format.lower() in _PIL_FORMAT_TO_EXT:
        return _PIL_FORMAT_TO_EXT[pil_format.lower()]
    _, ext = os.path.splitext(filename or "")
    ext = ext.lower()
    if ext in {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp", ".tiff", ".ico"}:
        return ".jpg" if ext == ".jpeg" else ext
    return ".png"


def _read_upload(file_or_base64):
    """Returns (bytes, original filename, declared content type)."""
    if _is_data_url(file_or_base64):
        header, _, encoded = file_or_base64.partition(",")
        content_type = header[len("data:"):].split(";")[0].strip().lower()
        try:
            blob = base64.b64decode(encoded, validate=True)
        except ValueError:
            raise UploadRejected("Invalid image data")
        return blob, "", content_type

    content_type = (getattr(file_or_base64, "content_type", "") or "").lower()
    size = getattr(file_or_base64, "size", None)
    if size is not None and size > MAX_UPLOAD_BYTES:
        raise UploadRejected("File too large. Maximum size is 10MB.")
    return file_or_base64.read(), getattr(file_or_base64, "name", ""), content_type


def save_upload(file_or_base64, folder="general"):
    """
    Validate an image (multipart file or data URL) and store it under
    uploads/<folder>/. Returns the public path of the stored file.
    """
    if folder not in UPLOAD_FOLDERS:
        raise UploadRejected(f"Unknown upload folder '{folder}'")

    blob, original_name, content_type = _read_upload(file_or_base64)
    if not content_type.startswith("image/"):
        raise UploadRejected("Only image files are allowed")
    if len(blob) > MAX_UPLOAD_BYTES:
        raise UploadRejected("File too large. Maximum size is 10MB.")
    if not blob:
        raise UploadRejected("Empty file")

    try:
        img = PILImage.open(BytesIO(blob))
        img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise UploadRejected("File is not a valid image")

    stem = slugify_name(os.path.splitext(original_name)[0]) or "image"
    filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{stem[:40]}{_infer_ext(original_name, img.format)}"
    stored = default_storage.save(f"{UPLOAD_ROOT}/{folder}/{filename}", ContentFile(blob))
    logger.info("Stored upload %s (%d bytes)", stored, len(blob))
    return default_storage.url(stored)


class UploadImageAPIView(APIView):
    permission_classes = [IsAdminToken]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request):
        payload = request.FILES.get("file") or request.FILES.get("image") or request.data.get("image")
        if not payload:
            return Response({"success": False, "error": "No file received"}, status=status.HTTP_400_BAD_REQUEST)

        folder = (request.data.get("folder") or "general").strip()
        try:
            path = save_upload(payload, folder=folder)
        except UploadRejected as e:
            return Response({"success": False, "error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except OSError:
            logger.exception("Image upload failed")
            return Response({"success": False, "error": "Upload failed"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "message": "Upload successful", "imagePath": path}, status=status.HTTP_201_CREATED)


def _as_list(val, sep=","):
    if val is None:
        return []
    if isinstance(val, (list, tuple)):
        return [str(v).strip() for v in val if str(v).strip()]
    return [v.strip() for v in str(val).split(sep) if v.strip()]


def _to_int(val, default=0):
    try:
        return int(str(val).strip())
    except (TypeError, ValueError):
        return default


def _truthy(val):
    if isinstance(val, bool):
        return val
    return str(val or "").strip().lower() in ("1", "true", "yes", "on")


def save_or_reject(serializer, label):
    """
    serializer.save() inside a savepoint. A unique-index collision that slipped
    past validation is rolled back and returned as a 400 response.
    Returns (instance, None) or (None, error_response).
    """
    try:
        with transaction.atomic():
            return serializer.save(), None
    except IntegrityError:
        logger.exception("Saving %s failed (rolled back)", label)
        return None, Response(
            {"success": False, "error": f"A {label} with this name already exists"},
            status=status.HTTP_400_BAD_REQUEST,
        )


def delete_with_confirm(instance, dependents, confirm, label):
    """
    Deletes `instance` and, through CASCADE, everything under it. When it
    still has dependents the caller must have sent confirm=true, otherwise a
    confirmation prompt is returned and nothing is touched.
    """
    if dependents and not confirm:
        return Response({
            "success": False,
            "confirm": True,
            "dependents": dependents,
            "message": f"Deleting this {label} will also delete {dependents} related item(s). Continue?",
        }, status=status.HTTP_200_OK)

    name = str(instance)
    with transaction.atomic():
        instance.delete()
    logger.info("Deleted %s '%s' with %d dependent item(s)", label, name, dependents)
    return Response({"success": True, "message": f"{label.capitalize()} deleted successfully"}, status=status.HTTP_200_OK)
