"""Application constants."""

# Scopes requested on the consent screen
SCOPES = [
    "profile",
    "email",
    "https://www.googleapis.com/auth/gmail.send",
    "https://www.googleapis.com/auth/gmail.readonly",
]

# People API lookup for the authenticated user
PEOPLE_RESOURCE = "people/me"
PEOPLE_FIELDS = "names,emailAddresses"

NOT_FOUND = "Not found"

PASTE_PROMPT = "Paste the redirect URL: "

INSTRUCTIONS = [
    "Open the above URL in your browser",
    "Accept the permissions",
    "You will be redirected, but likely see an error page",
    "Copy the full URL from your browser address bar",
    "Paste it below when prompted",
]

URL_ONLY_INSTRUCTIONS = [
    "Open the above URL in your browser",
    "Accept the permissions",
    "You should be redirected back to your application",
    "If you see an error, check the console log for details",
]

COMMON_ISSUES = [
    "Mismatch between credentials in your app and Google Cloud Console",
    "Required APIs not enabled (Gmail API, People API)",
    "Redirect URI not authorized in Google Cloud Console",
    "OAuth consent screen not properly configured",
]

NEXT_STEPS = [
    "Ensure your Google Cloud Console OAuth client matches these credentials",
    "Make sure the Gmail API is enabled in your project",
    "Restart your application",
]
