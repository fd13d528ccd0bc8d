from .jwt_token_service import JwtTokenService as JwtTokenService
