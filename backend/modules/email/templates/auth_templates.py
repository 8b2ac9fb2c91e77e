# backend/modules/email/templates/auth_templates.py

"""
Auth email templates
"""

VERIFICATION_SUBJECT = "🎉 Welcome to {{ product_name }} - Verify your email"

RESET_SUBJECT = "Reset your {{ product_name }} password"

# Base HTML template wrapper
BASE_HTML_WRAPPER = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{% block title %}{{ product_name }}{% endblock %}</title>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: linear-gradient(135deg, #f59e0b, #d97706); color: white; padding: 30px; text-align: center; border-radius: 8px 8px 0 0; }
        .content { background: #fff; padding: 30px; border: 1px solid #e5e7eb; border-top: none; }
        .button { display: inline-block; background: #f59e0b; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; font-weight: bold; margin: 20px 0; }
        .footer { background: #f9fafb; padding: 20px; text-align: center; border-radius: 0 0 8px 8px; color: #6b7280; font-size: 14px; }
        .logo { font-size: 24px; font-weight: bold; margin-bottom: 10px; }
    </style>
</head>
<body>
    <div class="header">
        <div class="logo">🍽️ {{ product_name }}</div>
        {% block header %}{% endblock %}
    </div>
    <div class="content">
        {% block content %}{% endblock %}
    </div>
    <div class="footer">
        <p>This email was sent to {{ user_email }}</p>
    </div>
</body>
</html>
"""

VERIFICATION_HTML = """
{% extends "base.html" %}
{% block title %}Welcome to {{ product_name }}{% endblock %}
{% block header %}
<h1>Welcome to {{ product_name }}!</h1>
<p>Your restaurant management journey starts here</p>
{% endblock %}
{% block content %}
<h2>Hi there! 👋</h2>
<p>Thank you for joining {{ product_name }}! We're excited to help you streamline your restaurant operations and create amazing dining experiences.</p>

<p>To get started, please verify your email address by clicking the button below:</p>

<div style="text-align: center;">
    <a href="{{ action_url }}" class="button">Verify Email Address</a>
</div>

<p>Once verified, you'll have access to:</p>
<ul>
    <li>✨ Complete restaurant management dashboard</li>
    <li>📱 QR code menu system</li>
    <li>📊 Real-time order tracking</li>
    <li>💰 Sales analytics and reporting</li>
    <li>👥 Staff management tools</li>
    <li>🎯 And much more!</li>
</ul>

<p><strong>Your {{ trial_days }}-day free trial starts now!</strong> No credit card required.</p>

<p>If you didn't create this account, you can safely ignore this email.</p>

<p>Welcome aboard!</p>
<p>The {{ product_name }} Team</p>
{% endblock %}
"""

RESET_HTML = """
{% extends "base.html" %}
{% block title %}Reset your {{ product_name }} password{% endblock %}
{% block header %}
<h1>Password reset</h1>
{% endblock %}
{% block content %}
<h2>Reset your password</h2>
<p>We received a request to reset the password for your {{ product_name }} account.</p>

<div style="text-align: center;">
    <a href="{{ action_url }}" class="button">Reset Password</a>
</div>

<p>If the button doesn't work, copy and paste this link into your browser:</p>
<p style="word-break: break-all;">{{ action_url }}</p>

<p>If you didn't request a password reset, you can safely ignore this email. Your password will not change.</p>

<p>The {{ product_name }} Team</p>
{% endblock %}
"""

AUTH_TEMPLATES = {
    "base.html": BASE_HTML_WRAPPER,
    "verification.html": VERIFICATION_HTML,
    "reset.html": RESET_HTML,
}
