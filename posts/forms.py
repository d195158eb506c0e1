from django import forms

from .models import Post


class PostForm(forms.ModelForm):
    """Binds title and text only; the id always comes from the URL or the database."""

    class Meta:
        model = Post
        fields = ('title', 'text')
        widgets = {
            'text': forms.Textarea(attrs={'rows': 5}),
        }
