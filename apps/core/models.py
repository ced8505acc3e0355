# apps/core/models.py

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """
    Manager for the credential store

    Users are only ever created through registration, so there is
    no superuser path.
    """

    use_in_migrations = True

    def create_user(self, email, password):
        if not email:
            raise ValueError("Users must have an email address")

        user = self.model(email=self.normalize_email(email))
        user.set_password(password)  # hashed by the configured bcrypt hasher
        user.save(using=self._db)
        return user

    def get_by_email(self, email):
        return self.get(email=self.normalize_email(email))

    def email_taken(self, email):
        return self.filter(email=self.normalize_email(email)).exists()


class User(AbstractBaseUser):
    """
    Registered board user

    Holds nothing but the login identity: email plus the password hash.
    Immutable after registration and never deleted through the API.
    """

    email = models.EmailField(unique=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        ordering = ['id']

    def __str__(self):
        return self.email
