summary_template = """
    You are an expert YouTube video analyst. A user has provided the following video URL: {video_url}

    Your first task is to provide a comprehensive summary of this video. Structure your response in Markdown format with the following sections:

    - **Main Topic:** Briefly describe the central theme of the video.
    - **Key Takeaways:** Use a bulleted list to highlight the most important points, insights, or events.
    - **Tone & Style:** Describe the video's overall feeling (e.g., educational, comedic, inspirational, technical).

    After this summary, add a friendly message inviting the user to ask any questions they have about the video.

    Base your analysis on your knowledge of the video's content, title, and creator. If you don't have specific knowledge, make an educated inference.
    """


def build_summary_prompt(video_url: str) -> str:
    """Fill the summary template with the submitted URL."""
    return summary_template.format(video_url=video_url)
