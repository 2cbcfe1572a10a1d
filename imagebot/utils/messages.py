"""User-facing message templates.

Templates are HTML (the bot default parse mode) unless their name ends in _MD,
which marks MarkdownV2 text.
"""

# =============================================================================
# START / HELP
# =============================================================================

WELCOME_NEW = "🎉 Welcome, {first_name}!\n\nYour account has been created successfully."

WELCOME_BACK = "👋 Welcome back, {first_name}!"

START_MESSAGE = """
{welcome}

I turn text descriptions into images.

📚 <b>Available Commands:</b>
/start - Show this welcome message
/help - Display all available commands
/me - View your profile information
/stats - View bot statistics
/settings - Manage your settings
/echo &lt;text&gt; - Echo back your message
/prompt - Generate images from text descriptions

💡 <b>Tip:</b> Use /help for more details on each command.
"""

HELP_MESSAGE = """
📖 <b>Command Reference</b>

<b>Available Commands:</b>
/help - Display this help message
/me - View your profile information
/stats - View bot usage statistics
/settings - Manage your settings
/notifications &lt;on|off&gt; - Turn notifications on or off
/echo &lt;text&gt; - Echo back your message
/prompt - Generate an image from a text description
/cancel - Cancel a pending image request
/image_settings - Configure image generation defaults (aspect ratio, size, model)

<b>Examples:</b>
<code>/prompt</code> - Start image generation (then send your description)
<code>/image_settings</code> - Configure default image generation settings
<code>/stats</code> - View bot usage statistics

💬 <b>Need Support?</b>
Contact the bot administrator for help.
"""


# =============================================================================
# PROMPT FLOW
# =============================================================================

PROMPT_UNAVAILABLE = (
    "❌ Image generation is not available. "
    "Please ask the bot administrator to configure the image provider API key."
)

PROMPT_REQUEST = """
🎨 <b>Image Generation</b>

Please send me a description of the image you'd like me to generate.

Example: A futuristic banana with neon lights in a cyberpunk city

<b>Current Settings:</b>
├ Aspect Ratio: <code>{aspect_ratio}</code>
├ Image Size: <code>{image_size}</code>
└ Model: <code>{model}</code>

💡 Change settings with /image_settings
Type /cancel to cancel.
"""

PROMPT_EMPTY = "❌ Please provide a valid prompt description."

PROMPT_GENERATING = "⏳ Generating your image... This may take a few moments."

PROMPT_NO_IMAGE = "❌ Failed to generate image. Please try again with a different prompt."

PROMPT_ERROR = "❌ An error occurred while generating the image. Please try again later."

PROMPT_CAPTION_MD = "🎨 *Generated Image*\n\n_Prompt:_ {prompt}"

PROMPT_CANCELLED = "✅ Image generation cancelled."

PROMPT_NOTHING_PENDING = "ℹ️ You don't have any pending image generation requests."


# =============================================================================
# PROFILE / STATS
# =============================================================================

PROFILE_MESSAGE = """
👤 <b>Your Profile</b>

<b>Basic Info:</b>
├ First Name: {first_name}
├ Last Name: {last_name}
├ Username: {username}
└ Language: {language}

<b>Account:</b>
├ Telegram ID: <code>{telegram_id}</code>
├ Premium: {premium}
├ Created: {created}
└ Last Active: {last_seen}

<b>Statistics:</b>
└ Commands Used: {commands_used}

<b>Settings:</b>
├ Notifications: {notifications}
└ Timezone: {timezone}
"""

STATS_MESSAGE = """
📊 <b>Bot Statistics</b>

<b>Users:</b>
├ Total Users: {total_users}
├ Active Today: {active_today}
└ Active This Week: {active_this_week}

<b>Top Commands (Last 7 Days):</b>
{top_commands}

<i>Statistics are updated in real-time.</i>
"""

STATS_TOP_COMMAND = "{index}. {command} - {count} uses"

STATS_NO_COMMANDS = "No commands recorded yet"


# =============================================================================
# SETTINGS
# =============================================================================

SETTINGS_MESSAGE = """
⚙️ <b>Your Settings</b>

<b>General:</b>
├ Notifications: {notifications}
└ Timezone: {timezone}

<b>Image Generation:</b>
├ Aspect Ratio: <code>{aspect_ratio}</code>
├ Image Size: <code>{image_size}</code>
└ Model: <code>{model}</code>

Use the buttons below to modify your settings.
"""

IMAGE_SETTINGS_MESSAGE = """
🎨 <b>Image Generation Settings</b>

These settings will be used as defaults when generating images with /prompt

<b>Current Settings:</b>
├ Aspect Ratio: <code>{aspect_ratio}</code>
├ Image Size: <code>{image_size}</code>
└ Model: <code>{model}</code>

<b>Available Options:</b>
• Aspect Ratio: 1:1, 9:16, 16:9, 4:3, 3:4
• Image Size: 1K (faster), 2K (higher quality)
• Model: Fast or High Quality

Use the buttons below to change your preferences.
"""

SELECT_ASPECT_RATIO = (
    "📐 <b>Select Aspect Ratio</b>\n\n"
    "Choose your preferred aspect ratio for generated images:"
)

SELECT_IMAGE_SIZE = (
    "📏 <b>Select Image Size</b>\n\n"
    "• 1K: Faster generation, smaller file size\n"
    "• 2K: Higher quality, larger file size"
)

SELECT_MODEL = (
    "🤖 <b>Select Model</b>\n\n"
    "• Fast: Faster generation, good quality\n"
    "• High Quality: Slower but higher quality with better text rendering"
)

NOTIFICATIONS_USAGE = "💡 <b>Usage:</b> <code>/notifications &lt;on|off&gt;</code>\n\nExample: <code>/notifications off</code>"

NOTIFICATIONS_INVALID = "❌ Invalid option. Use <code>on</code> or <code>off</code>."

NOTIFICATIONS_ENABLED = "🔔 Notifications have been <b>enabled</b>."

NOTIFICATIONS_DISABLED = "🔕 Notifications have been <b>disabled</b>."

SETTINGS_UPDATE_FAILED = "❌ Failed to update settings. Please try again."


# =============================================================================
# ECHO
# =============================================================================

ECHO_USAGE = "💡 <b>Usage:</b> <code>/echo &lt;your message&gt;</code>\n\nExample: <code>/echo Hello World</code>"

ECHO_REPLY_MD = "🔊 {text}"


# =============================================================================
# ERRORS
# =============================================================================

ERROR_USER_NOT_FOUND = "❌ Please run /start first to initialize your account."

ERROR_GENERIC = "❌ An error occurred. Please try again later."

UNKNOWN_COMMAND = "🤔 I don't know this command.\n\nUse /help to see what I can do."
