import bcrypt
from libs.result import Error, Result, Return

from src.app.services.password_policy import PasswordPolicy
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UserInfo
from .signup_dto import SignupCommand, SignupResponse
from src.domain.entities import AuditEvent, User


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[SignupResponse] (structured response)

    Business Logic:
    1. Validate password against the password policy
    2. Check if email or username already exists
    3. Hash password with bcrypt cost factor 12
    4. Create User
    5. Create AuditEvent with action=signup
    6. Commit transaction atomically
    7. Return SignupResponse with user data and access token
    """

    def __init__(self, uow: UnitOfWork, password_policy: PasswordPolicy):
        self.uow = uow
        self.password_policy = password_policy

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with validated username, email, password

        Returns:
            Result[SignupResponse] with user data and access token
            or Error(WEAK_PASSWORD | EMAIL_ALREADY_EXISTS | USERNAME_ALREADY_EXISTS)
        """
        password_validation = self.password_policy.validate(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            existing_user = await self.uow.users.get_by_username(command.username)
            if existing_user:
                return Return.err(
                    Error("USERNAME_ALREADY_EXISTS", "Username already taken")
                )

            # Hash password with bcrypt cost factor 12 (security requirement)
            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                username=command.username,
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
            )
            user = await self.uow.users.create(user)

            audit_event = AuditEvent(
                user_id=user.id,
                action="signup",
                event_metadata={"email": command.email, "username": command.username},
            )
            await self.uow.audit_events.create(audit_event)

            # Commit transaction atomically
            await self.uow.commit()

            # Import JWT utility here to avoid circular dependency
            from src.api.utils.jwt import generate_jwt

            # Generate JWT access token (15-minute expiry)
            access_token = generate_jwt(user_id=user.id)

            return Return.ok(
                SignupResponse(
                    user=UserInfo(
                        id=str(user.id),
                        username=user.username,
                        email=user.email,
                    ),
                    access_token=access_token,
                )
            )
