TEST_CLIENT_ID = "test_client_id"
TEST_APP_REDIRECT_URI = "com.example.app:/oauth2redirect"
TEST_CODE_VERIFIER = "0123456789_0123456789_0123456789_0123456789"
TEST_AUTHORIZATION_CODE = "ABCDEFGH"
TEST_REFRESH_TOKEN = "IJKLMNOP"
TEST_ISSUER = "https://test.openid.com"
TEST_TOKEN_ENDPOINT = "https://test.openid.com/o/oauth/token"
