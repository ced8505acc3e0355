# apps/core/hashers.py

from django.contrib.auth.hashers import BCryptSHA256PasswordHasher


class TaskboardBCryptPasswordHasher(BCryptSHA256PasswordHasher):
    """bcrypt (SHA-256 prehash) with cost factor 10"""

    rounds = 10
