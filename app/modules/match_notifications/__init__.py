"""Match Notifications Module

Turns match change events (goals, kickoff, full time, schedule changes and
reminders) into push notifications for the devices subscribed to the match's
tournament or teams."""
