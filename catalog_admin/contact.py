# Standard Library
import logging

# Django
from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from django.utils import timezone

# Django REST Framework
from rest_framework import status
from rest_framework.exceptions import Throttled
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .filters import ContactFilter, apply_filterset
from .models import Contact
from .permissions import IsAdminToken
from .queries import paginate, parse_pagination
from .serializers import ContactSerializer, ContactSubmissionSerializer, ContactUpdateSerializer
from .throttling import ContactSubmissionThrottle, minutes_until
from .utilities import _to_int

logger = logging.getLogger(__name__)

CONTACT_PAGE_SIZE = 50
BULK_OPERATIONS = ("markAllRead", "markAllUnread", "updateStatus")
STATUS_VALUES = {value for value, _ in Contact.STATUS_CHOICES}


class ContactsAPIView(APIView):
    """
    POST is the public contact form (throttled per client address); every
    other method is the admin inbox.
    """

    def get_authenticators(self):
        if self.request.method == "POST":
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAdminToken()]

    def get_throttles(self):
        if self.request.method == "POST":
            return [ContactSubmissionThrottle()]
        return []

    def throttled(self, request, wait):
        raise Throttled(
            wait,
            detail=f"Too many contact submissions. Please try again in {minutes_until(wait)} minute(s).",
        )

    def post(self, request):
        serializer = ContactSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            contact = serializer.save()
        except DatabaseError:
            logger.exception("Saving contact submission failed")
            return Response(
                {"success": False, "error": "Failed to submit contact form. Please try again later."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({
            "success": True,
            "message": "Thank you for contacting us! We will get back to you within 24 hours.",
            "data": {"id": contact.pk, "fullName": contact.full_name, "email": contact.email},
        }, status=status.HTTP_201_CREATED)

    def get(self, request):
        contacts = apply_filterset(ContactFilter, request.query_params, Contact.objects.all())
        limit, skip = parse_pagination(request.query_params, default_limit=CONTACT_PAGE_SIZE, offset_param="skip")
        items, pagination = paginate(contacts.order_by("-created_at", "-id"), limit, skip, offset_param="skip")
        return Response({
            "success": True,
            "data": ContactSerializer(items, many=True).data,
            "pagination": pagination,
        })

    def patch(self, request):
        """{"id": 7, "updates": {"status": "replied", "isRead": true}}"""
        contact_id = _to_int(request.data.get("id"), None)
        updates = request.data.get("updates")
        if contact_id is None or not isinstance(updates, dict):
            return Response({"success": False, "error": "Invalid request data"}, status=status.HTTP_400_BAD_REQUEST)

        contact = get_object_or_404(Contact, pk=contact_id)
        serializer = ContactUpdateSerializer(contact, data=updates, partial=True)
        serializer.is_valid(raise_exception=True)
        if not serializer.validated_data:
            return Response({"success": False, "error": "No valid fields to update"}, status=status.HTTP_400_BAD_REQUEST)
        contact = serializer.save()

        return Response({
            "success": True,
            "message": "Contact updated successfully",
            "data": ContactSerializer(contact).data,
        })

    def delete(self, request):
        contact_id = _to_int(request.data.get("id") or request.query_params.get("id"), None)
        if contact_id is None:
            return Response({"success": False, "error": "Contact ID is required"}, status=status.HTTP_400_BAD_REQUEST)

        contact = get_object_or_404(Contact, pk=contact_id)
        contact.delete()
        return Response({"success": True, "message": "Contact deleted successfully"})

    def put(self, request):
        """
        Bulk operation over every contact matching `filters`, applied as one
        UPDATE. matchedCount counts the filter's matches; modifiedCount only
        the rows whose value actually changed.
        """
        operation = request.data.get("operation")
        filters = request.data.get("filters") or {}
        if operation not in BULK_OPERATIONS:
            return Response({"success": False, "error": "Invalid operation"}, status=status.HTTP_400_BAD_REQUEST)
        if not isinstance(filters, dict):
            return Response({"success": False, "error": "filters must be an object"}, status=status.HTTP_400_BAD_REQUEST)

        matched = apply_filterset(ContactFilter, filters, Contact.objects.all())
        matched_count = matched.count()
        now = timezone.now()

        if operation == "markAllRead":
            modified = matched.filter(is_read=False).update(is_read=True, updated_at=now)
        elif operation == "markAllUnread":
            modified = matched.filter(is_read=True).update(is_read=False, updated_at=now)
        else:
            new_status = request.data.get("newStatus")
            if new_status not in STATUS_VALUES:
                return Response({"success": False, "error": "Invalid status"}, status=status.HTTP_400_BAD_REQUEST)
            modified = matched.exclude(status=new_status).update(status=new_status, updated_at=now)

        logger.info("Bulk %s on contacts: matched=%d modified=%d", operation, matched_count, modified)
        return Response({
            "success": True,
            "message": f"Bulk operation completed. {modified} contacts updated.",
            "data": {"operation": operation, "modifiedCount": modified, "matchedCount": matched_count},
        })
