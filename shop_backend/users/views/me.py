# users/views/me.py

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from permissions.roles import effective_capabilities_for
from users.serializers import ProfileUpdateSerializer, UserSerializer
from users.services.accounts import update_profile
from users.services.exceptions import EmailTakenError, InvalidPasswordError


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    @extend_schema(
        responses={200: UserSerializer},
        description="Current user plus the capabilities the admin console should unlock",
    )
    def get(self, request):
        data = UserSerializer(request.user).data
        data["capabilities"] = sorted(effective_capabilities_for(request, request.user))
        return Response(data)


class ProfileView(APIView):
    """
    GET   /api/users/profile/
    PATCH /api/users/profile/  (name, email, image, shippingAddress, currentPassword + newPassword)
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer})
    def get(self, request):
        return Response({"user": UserSerializer(request.user).data})

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer})
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = update_profile(request.user, serializer.to_changes())
        except (EmailTakenError, InvalidPasswordError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {"message": "Profile updated successfully", "user": UserSerializer(user).data}
        )
