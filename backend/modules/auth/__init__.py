"""Sign-up, sign-in and profile provisioning against the hosted identity provider."""
