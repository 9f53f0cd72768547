# users/serializers.py

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from permissions.roles import STAFF_ROLES

User = get_user_model()


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.ModelSerializer):
    """
    Public self-registration.

    Rules:
    - Accounts created here are always customers.
    - Staff/admin accounts are created by an admin (/api/users/, Django admin
      or createsuperuser).
    """

    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )

    class Meta:
        model = User
        fields = [
            "email",
            "username",
            "password",
            "first_name",
            "last_name",
            "phone",
        ]
        extra_kwargs = {"username": {"required": False}}

    def validate_email(self, value):
        value = (value or "").strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password"],
            username=(validated_data.get("username") or "").strip(),
            first_name=validated_data.get("first_name", ""),
            last_name=validated_data.get("last_name", ""),
            phone=validated_data.get("phone", ""),
            role=User.Role.CUSTOMER,
        )


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.

    identifier: email OR username
    """

    identifier = serializers.CharField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for frontend consumption.
    """

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "phone",
            "role",
        ]
        read_only_fields = fields


class LoginResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = UserSerializer()


# ---------------- SELF-SERVICE ----------------
class ProfileUpdateSerializer(serializers.ModelSerializer):
    """
    PATCH /api/auth/me/

    Users edit their own contact details only. Email, role and status
    are admin-managed.
    """

    class Meta:
        model = User
        fields = ["username", "first_name", "last_name", "phone"]

    def validate_username(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("username cannot be blank")
        if User.objects.filter(username__iexact=value).exclude(pk=self.instance.pk).exists():
            raise serializers.ValidationError("This username is taken.")
        return value


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True, style={"input_type": "password"})
    new_password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )

    def validate_current_password(self, value):
        if not self.context["request"].user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect")
        return value

    def validate(self, attrs):
        if attrs["current_password"] == attrs["new_password"]:
            raise serializers.ValidationError(
                {"new_password": "New password must differ from the current one"}
            )
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


# ---------------- ADMIN USER MANAGEMENT ----------------
class AdminUserSerializer(serializers.ModelSerializer):
    """
    Admin view of an account.

    Rules:
    - password is optional and write-only; it is hashed, never stored raw
    - is_staff (Django admin access) follows the role
    - an admin cannot demote or deactivate their own account
    """

    password = serializers.CharField(
        write_only=True,
        required=False,
        validators=[validate_password],
        style={"input_type": "password"},
    )

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "phone",
            "role",
            "is_active",
            "password",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {"username": {"required": False}}

    def validate_email(self, value):
        value = (value or "").strip().lower()
        qs = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def validate(self, attrs):
        request = self.context.get("request")
        if self.instance is not None and request is not None and self.instance.pk == request.user.pk:
            if attrs.get("role", self.instance.role) != self.instance.role:
                raise serializers.ValidationError({"role": "You cannot change your own role"})
            if attrs.get("is_active", True) is False:
                raise serializers.ValidationError({"is_active": "You cannot deactivate your own account"})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password", None)
        return User.objects.create_user(password=password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)

        for field, value in validated_data.items():
            setattr(instance, field, value)

        if "role" in validated_data:
            instance.is_staff = instance.role in STAFF_ROLES
        if password:
            instance.set_password(password)

        instance.save()
        return instance


class UserStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    active = serializers.IntegerField()
    inactive = serializers.IntegerField()
    by_role = serializers.DictField(child=serializers.IntegerField())
