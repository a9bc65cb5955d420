from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'email',
            'cash_balance',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """
    Serializer for user registration.

    Name uniqueness is enforced by the registration service so that a
    taken name is reported as a conflict rather than a validation error.
    """

    name = serializers.CharField(max_length=150, required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    email = serializers.EmailField(required=False, allow_null=True)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    name = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class CredentialsUpdateSerializer(serializers.Serializer):
    """Serializer for changing password and/or email."""

    name = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
    new_password = serializers.CharField(
        required=False,
        write_only=True,
        style={'input_type': 'password'}
    )
    email = serializers.EmailField(required=False, allow_null=True, allow_blank=True)


class AccountDeleteSerializer(serializers.Serializer):
    """Serializer for confirming account deletion."""

    name = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class TopUpSerializer(serializers.Serializer):
    """Serializer for adding money to the cash balance."""

    additional_cash_balance = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=True,
    )

    def validate_additional_cash_balance(self, value):
        if value <= 0:
            raise serializers.ValidationError('Amount must be positive')
        return value

